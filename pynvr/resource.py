from __future__ import annotations


class NvrResource:
    """Base class for everything the store caches.

    A resource wraps the JSON object the server sent. The store never
    edits one in place, a reload builds fresh objects.
    """

    def __init__(self, attrs: dict | None):
        self._attrs = dict(attrs) if attrs else {}

    def __repr__(self):
        return "<{0}:{1}:{2}>".format(self.__class__.__name__, self.id, self.name)

    def __eq__(self, other):
        return type(self) is type(other) and self._attrs == other._attrs

    def _load(self, key, default=None):
        value = self._attrs.get(key, default)
        return default if value is None else value

    @property
    def id(self) -> int | None:
        return self._attrs.get("id", None)

    @property
    def name(self) -> str:
        return self._load("name", "")

    @property
    def created_at(self) -> str | None:
        return self._attrs.get("created_at", None)

    def to_json(self) -> dict:
        return dict(self._attrs)

    @classmethod
    def from_list(cls, items) -> list:
        """Build a resource per item, skipping anything that isn't an object."""
        return [cls(item) for item in items if isinstance(item, dict)]
