from __future__ import annotations

import os

from ..constant import (
    AUTH_SCHEME_BEARER,
    AUTH_SCHEME_COOKIE,
    DEFAULT_HOST,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_SESSION_COOKIE,
    DEFAULT_TOAST_TIMEOUT,
    LOGIN_PAGE_PATH,
)
from .logger import NvrLogger


class NvrCfg:
    """Helper class to get at configuration options.

    Everything is passed in as keyword arguments and read back through
    properties so defaults live in one place.
    """

    _log: NvrLogger

    def __init__(self, log: NvrLogger, **kwargs):
        self._log = log.component("config")
        self._kw = kwargs
        self._log.debug("loaded")

    def _remove_scheme(self, host: str) -> str:
        return host.split("://")[-1]

    def _add_scheme(self, host: str, scheme: str = "https") -> str:
        if "://" in host:
            return host
        return f"{scheme}://{host}"

    @property
    def storage_dir(self) -> str:
        return self._kw.get("storage_dir", "./")

    @property
    def save_state(self) -> bool:
        return self._kw.get("save_state", True)

    @property
    def state_file(self) -> str | None:
        if not self.save_state:
            return None
        return self._kw.get("state_file", os.path.join(self.storage_dir, "pynvr.pickle"))

    @property
    def cookies_file(self) -> str | None:
        if not self.save_state:
            return None
        return self._kw.get("cookies_file", os.path.join(self.storage_dir, "cookies.txt"))

    @property
    def username(self) -> str | None:
        return self._kw.get("username", None)

    @property
    def password(self) -> str | None:
        return self._kw.get("password", None)

    @property
    def host(self) -> str:
        host = self._kw.get("host", DEFAULT_HOST)
        return self._add_scheme(host, "http").rstrip("/")

    @property
    def host_name(self) -> str:
        return self._remove_scheme(self.host)

    @property
    def auth_scheme(self) -> str:
        scheme = str(self._kw.get("auth_scheme", AUTH_SCHEME_COOKIE)).lower()
        if scheme not in (AUTH_SCHEME_COOKIE, AUTH_SCHEME_BEARER):
            self._log.warning(f"unknown auth scheme {scheme}, using {AUTH_SCHEME_COOKIE}")
            return AUTH_SCHEME_COOKIE
        return scheme

    @property
    def session_cookie(self) -> str:
        return self._kw.get("session_cookie", DEFAULT_SESSION_COOKIE)

    @property
    def request_timeout(self) -> float | None:
        return self._kw.get("request_timeout", None)

    @property
    def toast_timeout(self) -> float:
        return float(self._kw.get("toast_timeout", DEFAULT_TOAST_TIMEOUT))

    @property
    def status_poll_interval(self) -> float:
        return float(self._kw.get("status_poll_interval", DEFAULT_POLL_INTERVAL))

    @property
    def notification_poll_interval(self) -> float:
        return float(self._kw.get("notification_poll_interval", DEFAULT_POLL_INTERVAL))

    @property
    def login_path(self) -> str:
        return self._kw.get("login_path", LOGIN_PAGE_PATH)
