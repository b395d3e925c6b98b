from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, wait

from .camera import NvrCamera
from .capture import NvrCapture
from .constant import (
    AREAS,
    AREAS_PATH,
    CAMERA_STATUS,
    CAMERA_STATUS_PATH,
    CAMERA_SYNC_PATH,
    CAMERA_THUMBNAIL_PATH,
    CAMERAS,
    CAMERAS_PATH,
    CAPTURES,
    CAPTURES_PATH,
    FILTERED_CAMERAS,
    LOCATIONS,
    LOCATIONS_PATH,
    MOSAIC_START_PATH,
    MOSAIC_STOP_PATH,
    MOSAICS,
    MOSAICS_PATH,
    MSG_ALL_READ,
    MSG_CONNECTION_ERROR,
    MSG_DELETE_ERROR,
    MSG_ERROR,
    MSG_MOSAIC_STARTED,
    MSG_MOSAIC_STARTING,
    MSG_MOSAIC_STOPPED,
    MSG_SCREENSHOT_ERROR,
    MSG_SCREENSHOT_TAKEN,
    MSG_SESSION_EXPIRED,
    MSG_SHARE_TOGGLED,
    MSG_SYNCED,
    MSG_SYNCING,
    MSG_SYSTEM_LOCATION,
    MSG_SYSTEM_ROLE,
    MSG_THUMBNAILS_OFF,
    MSG_THUMBNAILS_ON,
    NOTIFICATION_READ_ALL_PATH,
    NOTIFICATION_READ_PATH,
    NOTIFICATION_SUMMARY_PATH,
    NOTIFICATIONS,
    NOTIFICATIONS_PATH,
    RESOURCE_MESSAGES,
    ROLES,
    ROLES_PATH,
    SCREENSHOT_PATH,
    SHARE_TOGGLE_PATH,
    SHARES,
    SHARES_PATH,
    STATUS_DISABLED,
    STATUS_OFFLINE,
    STATUS_ONLINE,
    THUMBNAIL_SETTING_PATH,
    THUMBNAIL_TOGGLE_PATH,
    THUMBNAILS_ENABLED,
    UNREAD_COUNT,
    USERS,
    USERS_PATH,
)
from .core import NvrCore
from .core.errors import NvrAuthError, NvrError
from .filters import NvrCameraFilter, filter_cameras
from .location import NvrArea, NvrLocation
from .mosaic import NvrMosaic, NvrMosaicShare
from .notification import NvrNotification
from .objects import NvrObjects
from .poller import NvrPoller
from .toast import NvrToasts
from .user import NvrRole, NvrUser

_PATHS = {
    CAMERAS: CAMERAS_PATH,
    LOCATIONS: LOCATIONS_PATH,
    AREAS: AREAS_PATH,
    MOSAICS: MOSAICS_PATH,
    USERS: USERS_PATH,
    ROLES: ROLES_PATH,
    CAPTURES: CAPTURES_PATH,
    NOTIFICATIONS: NOTIFICATIONS_PATH,
    SHARES: SHARES_PATH,
}

_FACTORIES = {
    CAMERAS: NvrCamera,
    LOCATIONS: NvrLocation,
    AREAS: NvrArea,
    MOSAICS: NvrMosaic,
    USERS: NvrUser,
    ROLES: NvrRole,
    CAPTURES: NvrCapture,
    NOTIFICATIONS: NvrNotification,
    SHARES: NvrMosaicShare,
}

# These are reloaded by timers, a failing load mustn't pop up a toast every
# time it happens.
_SILENT_LOADS = [MOSAICS, CAPTURES, NOTIFICATIONS]


class NvrStore:
    """The client side copy of everything the server owns.

    Every operation follows the same pattern: send the request, reload the
    whole collection on success and tell the user what happened with a
    toast. Nothing raises out of a public operation, they return a bool,
    an error string or `None`.

    Loads and saves run on the caller's thread, poll ticks on the
    background thread. Whichever load finishes last wins.
    """

    _core: NvrCore
    _objs: NvrObjects
    _toasts: NvrToasts

    def __init__(self, core: NvrCore, objs: NvrObjects, toasts: NvrToasts):
        self._core = core
        self._log = core.log.component("store")
        self._objs = objs
        self._toasts = toasts

        self._lock = threading.RLock()
        self._attr_cbs = {}

        # Derived camera list, rebuilt on first read after a change.
        self._filtered = None
        self.filters = NvrCameraFilter(on_change=self._filtered_changed)

        self._ready = {}
        self._camera_status = {}
        self._unread_count = 0
        self._thumbnails_enabled = None

        self._status_poller = NvrPoller(core, "status", self.load_status,
                                        core.cfg.status_poll_interval)
        self._notification_poller = NvrPoller(core, "notifications", self.load_notifications,
                                              core.cfg.notification_poll_interval)

        self._loaders = {
            CAMERAS: self.load_cameras,
            LOCATIONS: self.load_locations,
            AREAS: self.load_areas,
            MOSAICS: self.load_mosaics,
            USERS: self.load_users,
            ROLES: self.load_roles,
            CAPTURES: self.load_captures,
            NOTIFICATIONS: self.load_notifications,
            SHARES: self.load_shares,
        }

    def __repr__(self):
        return "<{0}:{1}>".format(self.__class__.__name__, self._core.cfg.host_name)

    # Callbacks.

    def add_attr_callback(self, attr, cb):
        """Call `cb(store, attr, value)` when `attr` changes.

        `attr` is a collection name, `filtered_cameras`, `camera_status`,
        `unread_count`, `thumbnails_enabled` or `*` for all of them.
        """
        with self._lock:
            self._attr_cbs.setdefault(attr, []).append(cb)

    def _has_callbacks(self, attr) -> bool:
        with self._lock:
            return bool(self._attr_cbs.get(attr)) or bool(self._attr_cbs.get("*"))

    def _do_callbacks(self, attr, value):
        with self._lock:
            cbs = list(self._attr_cbs.get(attr, [])) + list(self._attr_cbs.get("*", []))
        for cb in cbs:
            try:
                cb(self, attr, value)
            except Exception as e:
                self._log.warning(f"{attr} callback failed: {type(e).__name__}")

    # Shared plumbing.

    def _failure_message(self, e: NvrError, default: str) -> str:
        if isinstance(e, NvrAuthError):
            return MSG_SESSION_EXPIRED
        return default

    def _replace(self, kind, items):
        setattr(self._objs, kind, items)
        self._log.vdebug(f"{kind} replaced, {len(items)} items")
        self._do_callbacks(kind, items)
        if kind == CAMERAS:
            self._update_camera_status()
            self._filtered_changed()

    def _load(self, kind, path=None) -> bool:
        if path is None:
            path = _PATHS[kind]
        try:
            response = self._core.be.get(path)
        except NvrError as e:
            if kind in _SILENT_LOADS:
                self._log.debug(f"load {kind} failed quietly: {type(e).__name__}")
            else:
                self._toasts.error(self._failure_message(e, RESOURCE_MESSAGES[kind][0]))
            return False

        if response.success and response.data is not None:
            self._replace(kind, _FACTORIES[kind].from_list(response.data))
            return True
        self._log.debug(f"load {kind} refused: {response.error}")
        return False

    def _reload(self, kinds):
        for kind in kinds:
            self._loaders[kind]()

    def _save(self, kind, res_id, body) -> tuple[bool, str | None, bool]:
        """Create (no id) or update a resource.

        Returns `(ok, message, toasted)`. Connection and session failures
        are toasted here, application failures are left to the caller.
        """
        path = _PATHS[kind]
        _load_msg, created_msg, updated_msg, _deleted_msg, failed_msg = RESOURCE_MESSAGES[kind]
        try:
            if res_id is None:
                response = self._core.be.post(path, body)
            else:
                response = self._core.be.put(f"{path}/{res_id}", body)
        except NvrError as e:
            message = self._failure_message(e, MSG_CONNECTION_ERROR)
            self._toasts.error(message)
            return False, message, True

        if response.success:
            self._reload([kind])
            self._toasts.success(created_msg if res_id is None else updated_msg)
            return True, None, False
        return False, response.error_or(failed_msg), False

    def _save_flag(self, kind, res_id, body) -> bool:
        ok, message, toasted = self._save(kind, res_id, body)
        if not ok and not toasted:
            self._toasts.error(message)
        return ok

    def _save_message(self, kind, res_id, body) -> bool | str:
        ok, message, _toasted = self._save(kind, res_id, body)
        return True if ok else message

    def _delete(self, kind, res_id, reload=None) -> bool:
        try:
            response = self._core.be.delete(f"{_PATHS[kind]}/{res_id}")
        except NvrError as e:
            self._toasts.error(self._failure_message(e, MSG_CONNECTION_ERROR))
            return False

        if response.success:
            self._reload(reload if reload is not None else [kind])
            self._toasts.success(RESOURCE_MESSAGES[kind][3])
            return True
        self._toasts.error(response.error_or(MSG_DELETE_ERROR))
        return False

    def _post(self, path, success_msg=None, use_data=True, error_msg=MSG_ERROR):
        """Post a command and toast the outcome.

        Returns the response on success, `None` otherwise. If `use_data` is
        set a text answer from the server replaces `success_msg`.
        """
        try:
            response = self._core.be.post(path)
        except NvrError as e:
            self._toasts.error(self._failure_message(e, MSG_CONNECTION_ERROR))
            return None

        if not response.success:
            self._toasts.error(response.error_or(error_msg))
            return None
        if use_data and isinstance(response.data, str) and response.data:
            success_msg = response.data
        if success_msg is not None:
            self._toasts.success(success_msg)
        return response

    # Cameras.

    def load_cameras(self) -> bool:
        return self._load(CAMERAS)

    def save_camera(self, camera_id, body) -> bool:
        """Create the camera if `camera_id` is `None`, otherwise update it."""
        return self._save_flag(CAMERAS, camera_id, body)

    def create_camera(self, body) -> bool:
        return self.save_camera(None, body)

    def update_camera(self, camera_id, body) -> bool:
        return self.save_camera(camera_id, body)

    def delete_camera(self, camera_id) -> bool:
        return self._delete(CAMERAS, camera_id)

    def sync_cameras(self) -> bool:
        """Ask the server to push every camera to the streaming backend."""
        self._toasts.info(MSG_SYNCING)
        return self._post(CAMERA_SYNC_PATH, MSG_SYNCED) is not None

    def camera_thumbnail(self, camera_id) -> str | None:
        """Returns the url of the latest thumbnail, if there is one."""
        try:
            response = self._core.be.get(CAMERA_THUMBNAIL_PATH.format(camera_id))
        except NvrError as e:
            self._log.debug(f"thumbnail {camera_id} failed: {type(e).__name__}")
            return None
        if response.success and isinstance(response.data, dict):
            return response.data.get("thumbnail_url", None)
        return None

    # Camera status.

    def load_status(self) -> bool:
        """Ask which streams are up and rebuild the camera status map.

        Polled, so failures stay quiet.
        """
        try:
            response = self._core.be.get(CAMERA_STATUS_PATH)
        except NvrError as e:
            self._log.debug(f"status failed quietly: {type(e).__name__}")
            return False
        if not response.success or not isinstance(response.data, list):
            self._log.debug(f"status refused: {response.error}")
            return False

        ready = {}
        for item in response.data:
            if isinstance(item, dict) and item.get("name", None) is not None:
                ready[item["name"]] = bool(item.get("ready", False))
        with self._lock:
            self._ready = ready
        self._update_camera_status()
        return True

    def _update_camera_status(self):
        with self._lock:
            status = {}
            for camera in self._objs.cameras:
                if not camera.enabled:
                    status[camera.id] = STATUS_DISABLED
                elif self._ready.get(camera.name, False):
                    status[camera.id] = STATUS_ONLINE
                else:
                    status[camera.id] = STATUS_OFFLINE
            self._camera_status = status
        self._do_callbacks(CAMERA_STATUS, dict(status))

    @property
    def camera_status(self) -> dict:
        with self._lock:
            return dict(self._camera_status)

    def status_of(self, camera_id) -> str | None:
        with self._lock:
            return self._camera_status.get(camera_id, None)

    # Filtering.

    def _filtered_changed(self):
        with self._lock:
            self._filtered = None
        if self._has_callbacks(FILTERED_CAMERAS):
            self._do_callbacks(FILTERED_CAMERAS, self.filtered_cameras)

    @property
    def filtered_cameras(self) -> list[NvrCamera]:
        with self._lock:
            if self._filtered is None:
                self._filtered = filter_cameras(self._objs.cameras, self.filters)
            return list(self._filtered)

    def clear_filters(self):
        self.filters.clear()

    # Locations and areas.

    def load_locations(self) -> bool:
        return self._load(LOCATIONS)

    def save_location(self, location_id, body) -> bool | str:
        return self._save_message(LOCATIONS, location_id, body)

    def create_location(self, body) -> bool | str:
        return self.save_location(None, body)

    def update_location(self, location_id, body) -> bool | str:
        return self.save_location(location_id, body)

    def delete_location(self, location_id) -> bool:
        """Delete a location and reload locations and areas.

        System locations are refused here, before anything is sent.
        """
        location = self._objs.find(LOCATIONS, location_id)
        if location is not None and location.is_system:
            self._toasts.error(MSG_SYSTEM_LOCATION)
            return False
        return self._delete(LOCATIONS, location_id, reload=[LOCATIONS, AREAS])

    def load_areas(self) -> bool:
        return self._load(AREAS)

    def save_area(self, area_id, body) -> bool | str:
        return self._save_message(AREAS, area_id, body)

    def create_area(self, body) -> bool | str:
        return self.save_area(None, body)

    def update_area(self, area_id, body) -> bool | str:
        return self.save_area(area_id, body)

    def delete_area(self, area_id) -> bool:
        return self._delete(AREAS, area_id)

    # Mosaics.

    def load_mosaics(self) -> bool:
        return self._load(MOSAICS)

    def save_mosaic(self, mosaic_id, body) -> bool | str:
        return self._save_message(MOSAICS, mosaic_id, body)

    def create_mosaic(self, body) -> bool | str:
        return self.save_mosaic(None, body)

    def update_mosaic(self, mosaic_id, body) -> bool | str:
        return self.save_mosaic(mosaic_id, body)

    def delete_mosaic(self, mosaic_id) -> bool:
        return self._delete(MOSAICS, mosaic_id)

    def start_mosaic(self, mosaic_id) -> bool:
        self._toasts.info(MSG_MOSAIC_STARTING)
        if self._post(MOSAIC_START_PATH.format(mosaic_id), MSG_MOSAIC_STARTED) is None:
            return False
        self.load_mosaics()
        return True

    def stop_mosaic(self, mosaic_id) -> bool:
        if self._post(MOSAIC_STOP_PATH.format(mosaic_id), MSG_MOSAIC_STOPPED, use_data=False) is None:
            return False
        self.load_mosaics()
        return True

    # Users and roles.

    def load_users(self) -> bool:
        return self._load(USERS)

    def save_user(self, user_id, body) -> bool | str:
        return self._save_message(USERS, user_id, body)

    def create_user(self, body) -> bool | str:
        return self.save_user(None, body)

    def update_user(self, user_id, body) -> bool | str:
        return self.save_user(user_id, body)

    def delete_user(self, user_id) -> bool:
        return self._delete(USERS, user_id)

    def load_roles(self) -> bool:
        return self._load(ROLES)

    def save_role(self, role_id, body) -> bool | str:
        """`body` carries `name`, `description` and a `permissions` list."""
        return self._save_message(ROLES, role_id, body)

    def create_role(self, body) -> bool | str:
        return self.save_role(None, body)

    def update_role(self, role_id, body) -> bool | str:
        return self.save_role(role_id, body)

    def delete_role(self, role_id) -> bool:
        role = self._objs.find(ROLES, role_id)
        if role is not None and role.is_system:
            self._toasts.error(MSG_SYSTEM_ROLE)
            return False
        return self._delete(ROLES, role_id)

    # Captures and thumbnails.

    def load_captures(self) -> bool:
        return self._load(CAPTURES)

    def take_screenshot(self, camera_id) -> bool:
        if self._post(SCREENSHOT_PATH.format(camera_id), MSG_SCREENSHOT_TAKEN,
                      use_data=False, error_msg=MSG_SCREENSHOT_ERROR) is None:
            return False
        self.load_captures()
        return True

    def delete_capture(self, capture_id) -> bool:
        return self._delete(CAPTURES, capture_id)

    def _set_thumbnails_enabled(self, enabled):
        with self._lock:
            self._thumbnails_enabled = enabled
        self._do_callbacks(THUMBNAILS_ENABLED, enabled)

    def load_thumbnail_setting(self) -> bool | None:
        try:
            response = self._core.be.get(THUMBNAIL_SETTING_PATH)
        except NvrError as e:
            self._log.debug(f"thumbnail setting failed quietly: {type(e).__name__}")
            return None
        if response.success and isinstance(response.data, bool):
            self._set_thumbnails_enabled(response.data)
            return response.data
        return None

    def toggle_thumbnails(self) -> bool | None:
        """Flip automatic thumbnails. Returns the new setting or `None`."""
        response = self._post(THUMBNAIL_TOGGLE_PATH, use_data=False)
        if response is None or not isinstance(response.data, bool):
            return None
        self._set_thumbnails_enabled(response.data)
        self._toasts.success(MSG_THUMBNAILS_ON if response.data else MSG_THUMBNAILS_OFF)
        return response.data

    @property
    def thumbnails_enabled(self) -> bool | None:
        return self._thumbnails_enabled

    # Notifications.

    def load_notifications(self) -> bool:
        """Reload the notification summary, the latest few plus the unread count.

        Polled, so failures stay quiet.
        """
        try:
            response = self._core.be.get(NOTIFICATION_SUMMARY_PATH)
        except NvrError as e:
            self._log.debug(f"notifications failed quietly: {type(e).__name__}")
            return False
        if not response.success or not isinstance(response.data, dict):
            self._log.debug(f"notifications refused: {response.error}")
            return False

        items = NvrNotification.from_list(response.data.get("notifications", None) or [])
        count = int(response.data.get("unread_count", 0) or 0)
        with self._lock:
            self._objs.notifications = items
            self._unread_count = count
        self._do_callbacks(NOTIFICATIONS, items)
        self._do_callbacks(UNREAD_COUNT, count)
        return True

    def mark_notification_read(self, notification_id) -> bool:
        """Mark one notification read, locally as well, without a reload."""
        try:
            response = self._core.be.post(NOTIFICATION_READ_PATH.format(notification_id))
        except NvrError as e:
            self._toasts.error(self._failure_message(e, MSG_CONNECTION_ERROR))
            return False
        if not response.success:
            self._toasts.error(response.error_or(MSG_ERROR))
            return False

        with self._lock:
            was_unread = False
            items = []
            for notification in self._objs.notifications:
                if notification.id == notification_id and not notification.read:
                    was_unread = True
                    notification = notification.as_read()
                items.append(notification)
            self._objs.notifications = items
            if was_unread:
                self._unread_count = max(0, self._unread_count - 1)
            count = self._unread_count
        self._do_callbacks(NOTIFICATIONS, items)
        self._do_callbacks(UNREAD_COUNT, count)
        return True

    def mark_all_notifications_read(self) -> bool:
        if self._post(NOTIFICATION_READ_ALL_PATH, MSG_ALL_READ) is None:
            return False
        with self._lock:
            items = [notification.as_read() for notification in self._objs.notifications]
            self._objs.notifications = items
            self._unread_count = 0
        self._do_callbacks(NOTIFICATIONS, items)
        self._do_callbacks(UNREAD_COUNT, 0)
        return True

    def delete_notification(self, notification_id) -> bool:
        return self._delete(NOTIFICATIONS, notification_id)

    @property
    def unread_count(self) -> int:
        return self._unread_count

    # Share links.

    def load_shares(self, mosaic_id=None) -> bool:
        path = SHARES_PATH if mosaic_id is None else f"{SHARES_PATH}?mosaic_id={mosaic_id}"
        return self._load(SHARES, path)

    def create_share(self, mosaic_id, emails, duration_hours,
                     schedule_start=None, schedule_end=None) -> bool | str:
        """Create a share link for a mosaic.

        The link expires `duration_hours` from now. A schedule, when given,
        limits the hours of the day it works in.
        """
        body = {
            "mosaic_id": mosaic_id,
            "emails": list(emails),
            "duration_hours": duration_hours,
        }
        if schedule_start is not None:
            body["schedule_start"] = schedule_start
        if schedule_end is not None:
            body["schedule_end"] = schedule_end
        return self._save_message(SHARES, None, body)

    def toggle_share(self, share_id) -> bool:
        if self._post(SHARE_TOGGLE_PATH.format(share_id), MSG_SHARE_TOGGLED, use_data=False) is None:
            return False
        self.load_shares()
        return True

    def delete_share(self, share_id) -> bool:
        return self._delete(SHARES, share_id)

    # Start up and tear down.

    def load_all(self):
        """Load the main collections side by side then start polling.

        A slow or failing load doesn't hold up the others, each one catches
        its own failures. If a load ended the session polling stays off.
        """
        loads = [
            self.load_locations,
            self.load_areas,
            self.load_cameras,
            self.load_mosaics,
            self.load_users,
            self.load_roles,
        ]
        with ThreadPoolExecutor(max_workers=len(loads), thread_name_prefix="NvrLoad") as pool:
            futures = [pool.submit(load) for load in loads]
            wait(futures)
        for future in futures:
            if future.exception() is not None:
                self._log.error(f"load failed: {future.exception()}")
        self._log.debug("initial load done")
        if not self._core.be.is_authenticated:
            self._log.debug("session ended during load, not polling")
            return
        self.start_polling()

    def start_polling(self):
        self._status_poller.start()
        self._notification_poller.start()

    def stop_all(self):
        self._status_poller.stop()
        self._notification_poller.stop()

    @property
    def status_poller(self) -> NvrPoller:
        return self._status_poller

    @property
    def notification_poller(self) -> NvrPoller:
        return self._notification_poller

    # Collections.

    @property
    def cameras(self):
        return self._objs.cameras

    @property
    def locations(self):
        return self._objs.locations

    @property
    def areas(self):
        return self._objs.areas

    @property
    def mosaics(self):
        return self._objs.mosaics

    @property
    def users(self):
        return self._objs.users

    @property
    def roles(self):
        return self._objs.roles

    @property
    def captures(self):
        return self._objs.captures

    @property
    def notifications(self):
        return self._objs.notifications

    @property
    def shares(self):
        return self._objs.shares
