from __future__ import annotations

import threading
from typing import Iterable

from .camera import NvrCamera


class NvrCameraFilter:
    """The criteria the camera list is filtered by.

    Changing any field, or calling `clear`, calls the change callback once.
    The defaults show only cameras that are enabled and recording.
    """

    def __init__(self, on_change=None):
        self._lock = threading.Lock()
        self._on_change = on_change
        self._search_query = ""
        self._locations: frozenset[str] = frozenset()
        self._areas: frozenset[str] = frozenset()
        self._enabled_only = True
        self._recording_only = True

    def __repr__(self):
        return "<NvrCameraFilter:search={0},locations={1},areas={2},enabled={3},recording={4}>".format(
            self._search_query, sorted(self._locations), sorted(self._areas),
            self._enabled_only, self._recording_only
        )

    def _changed(self):
        if self._on_change is not None:
            self._on_change()

    @property
    def search_query(self) -> str:
        return self._search_query

    @search_query.setter
    def search_query(self, value: str):
        with self._lock:
            self._search_query = value or ""
        self._changed()

    @property
    def locations(self) -> frozenset[str]:
        return self._locations

    @locations.setter
    def locations(self, value: Iterable[str]):
        with self._lock:
            self._locations = frozenset(value or [])
        self._changed()

    @property
    def areas(self) -> frozenset[str]:
        return self._areas

    @areas.setter
    def areas(self, value: Iterable[str]):
        with self._lock:
            self._areas = frozenset(value or [])
        self._changed()

    @property
    def enabled_only(self) -> bool:
        return self._enabled_only

    @enabled_only.setter
    def enabled_only(self, value: bool):
        with self._lock:
            self._enabled_only = bool(value)
        self._changed()

    @property
    def recording_only(self) -> bool:
        return self._recording_only

    @recording_only.setter
    def recording_only(self, value: bool):
        with self._lock:
            self._recording_only = bool(value)
        self._changed()

    def clear(self):
        """Back to the defaults in one step."""
        with self._lock:
            self._search_query = ""
            self._locations = frozenset()
            self._areas = frozenset()
            self._enabled_only = True
            self._recording_only = True
        self._changed()

    def snapshot(self) -> tuple:
        """Return `(search, locations, areas, enabled_only, recording_only)` read together."""
        with self._lock:
            return (self._search_query, self._locations, self._areas,
                    self._enabled_only, self._recording_only)


def camera_matches(camera: NvrCamera, criteria: NvrCameraFilter) -> bool:
    """Return `True` if the camera passes all five filters."""
    search, locations, areas, enabled_only, recording_only = criteria.snapshot()
    return _matches(camera, search.lower(), locations, areas, enabled_only, recording_only)


def _matches(camera, search, locations, areas, enabled_only, recording_only) -> bool:
    matches_search = (
        not search
        or search in camera.name.lower()
        or search in camera.host.lower()
        or search in camera.location.lower()
        or search in camera.area.lower()
    )
    matches_location = not locations or camera.location in locations
    matches_area = not areas or camera.area in areas
    matches_enabled = not enabled_only or camera.enabled
    matches_recording = not recording_only or camera.record
    return matches_search and matches_location and matches_area and matches_enabled and matches_recording


def filter_cameras(cameras: Iterable[NvrCamera], criteria: NvrCameraFilter) -> list[NvrCamera]:
    """Return the cameras passing `criteria`, in their original order."""
    search, locations, areas, enabled_only, recording_only = criteria.snapshot()
    search = search.lower()
    return [camera for camera in cameras
            if _matches(camera, search, locations, areas, enabled_only, recording_only)]
