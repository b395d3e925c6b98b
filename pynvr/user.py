from __future__ import annotations

from .resource import NvrResource


class NvrPermission:
    """What a role may do in one module."""

    def __init__(self, attrs: dict):
        self.module = attrs.get("module", "")
        self.can_view = bool(attrs.get("can_view", False))
        self.can_create = bool(attrs.get("can_create", False))
        self.can_edit = bool(attrs.get("can_edit", False))
        self.can_delete = bool(attrs.get("can_delete", False))

    def __repr__(self):
        return "<NvrPermission:{0}>".format(self.module)

    def to_json(self) -> dict:
        return {
            "module": self.module,
            "can_view": self.can_view,
            "can_create": self.can_create,
            "can_edit": self.can_edit,
            "can_delete": self.can_delete,
        }


class NvrUser(NvrResource):

    def __repr__(self):
        return "<NvrUser:{0}:{1}>".format(self.id, self.username)

    @property
    def name(self) -> str:
        return self.username

    @property
    def username(self) -> str:
        return self._load("username", "")

    @property
    def email(self) -> str:
        return self._load("email", "")

    @property
    def role(self) -> str:
        return self._load("role", "")

    @property
    def active(self) -> bool:
        return bool(self._load("active", False))


class NvrRole(NvrResource):

    @property
    def description(self) -> str:
        return self._load("description", "")

    @property
    def is_system(self) -> bool:
        return bool(self._load("is_system", False))

    @property
    def permissions(self) -> list[NvrPermission]:
        return [NvrPermission(p) for p in self._load("permissions", []) if isinstance(p, dict)]

    def permission(self, module: str) -> NvrPermission | None:
        for permission in self.permissions:
            if permission.module == module:
                return permission
        return None
