from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .camera import NvrCamera
    from .capture import NvrCapture
    from .location import NvrArea, NvrLocation
    from .mosaic import NvrMosaic, NvrMosaicShare
    from .notification import NvrNotification
    from .user import NvrRole, NvrUser


class NvrObjects:
    """The collections we know about.

    Each list is replaced as a whole on every load, nothing appends to or
    splices them. Every `PyNvr` gets its own instance.
    """
    cameras: list[NvrCamera]
    locations: list[NvrLocation]
    areas: list[NvrArea]
    mosaics: list[NvrMosaic]
    users: list[NvrUser]
    roles: list[NvrRole]
    captures: list[NvrCapture]
    notifications: list[NvrNotification]
    shares: list[NvrMosaicShare]

    def __init__(self):
        self.cameras = []
        self.locations = []
        self.areas = []
        self.mosaics = []
        self.users = []
        self.roles = []
        self.captures = []
        self.notifications = []
        self.shares = []

    def find(self, kind: str, res_id):
        for item in getattr(self, kind):
            if item.id == res_id:
                return item
        return None
