from __future__ import annotations

from .resource import NvrResource


class NvrMosaicCamera:
    """One tile of a mosaic."""

    def __init__(self, attrs: dict):
        self.camera_id = attrs.get("camera_id", None)
        self.camera_name = attrs.get("camera_name", "")
        self.position = attrs.get("position", 0)

    def __repr__(self):
        return "<NvrMosaicCamera:{0}:{1}>".format(self.position, self.camera_name)


class NvrMosaic(NvrResource):
    """A grid of camera streams.

    The process showing it runs on the server, `pid` is only a handle.
    """

    @property
    def layout(self) -> str:
        return self._load("layout", "")

    @property
    def active(self) -> bool:
        return bool(self._load("active", False))

    @property
    def pid(self) -> int | None:
        return self._attrs.get("pid", None)

    @property
    def cameras(self) -> list[NvrMosaicCamera]:
        """Returns the mosaic cameras ordered by position."""
        tiles = [NvrMosaicCamera(c) for c in self._load("cameras", []) if isinstance(c, dict)]
        return sorted(tiles, key=lambda tile: tile.position)

    @property
    def camera_ids(self) -> list[int]:
        return [tile.camera_id for tile in self.cameras]


class NvrMosaicShare(NvrResource):
    """A time limited link to a mosaic sent to a list of people."""

    def __repr__(self):
        return "<NvrMosaicShare:{0}:{1}>".format(self.id, self.mosaic_id)

    @property
    def mosaic_id(self) -> int | None:
        return self._attrs.get("mosaic_id", None)

    @property
    def mosaic_name(self) -> str:
        return self._load("mosaic_name", "")

    @property
    def token(self) -> str:
        return self._load("token", "")

    @property
    def emails(self) -> list[str]:
        """The server keeps them comma separated, we split them."""
        emails = self._load("emails", "")
        if isinstance(emails, list):
            return emails
        return [email.strip() for email in emails.split(",") if email.strip()]

    @property
    def expires_at(self) -> str | None:
        return self._attrs.get("expires_at", None)

    @property
    def schedule_start(self) -> str | None:
        return self._attrs.get("schedule_start", None)

    @property
    def schedule_end(self) -> str | None:
        return self._attrs.get("schedule_end", None)

    @property
    def has_schedule(self) -> bool:
        return self.schedule_start is not None and self.schedule_end is not None

    @property
    def active(self) -> bool:
        return bool(self._load("active", False))
