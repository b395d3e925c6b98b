from __future__ import annotations

from .resource import NvrResource


class NvrCamera(NvrResource):
    """A camera as the server describes it.

    `location` and `area` are names, not ids.
    """

    @property
    def host(self) -> str:
        return self._load("host", "")

    @property
    def port(self) -> int:
        return self._load("port", 554)

    @property
    def username(self) -> str:
        return self._load("username", "")

    @property
    def password(self) -> str:
        return self._load("password", "")

    @property
    def path(self) -> str:
        return self._load("path", "")

    @property
    def protocol(self) -> str:
        return self._load("protocol", "rtsp")

    @property
    def enabled(self) -> bool:
        return bool(self._load("enabled", False))

    @property
    def record(self) -> bool:
        return bool(self._load("record", False))

    @property
    def source_on_demand(self) -> bool:
        return bool(self._load("source_on_demand", False))

    @property
    def location(self) -> str:
        return self._load("location", "")

    @property
    def area(self) -> str:
        return self._load("area", "")

    @property
    def thumbnail_url(self) -> str | None:
        return self._attrs.get("thumbnail_url", None)

    @property
    def updated_at(self) -> str | None:
        return self._attrs.get("updated_at", None)

    @property
    def stream_url(self) -> str:
        """Returns the url the camera streams on, credentials included.
        """
        if not self.username:
            return f"{self.protocol}://{self.host}:{self.port}{self.path}"
        return f"{self.protocol}://{self.username}:{self.password}@{self.host}:{self.port}{self.path}"
