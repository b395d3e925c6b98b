from __future__ import annotations

import pprint
from http.cookiejar import LWPCookieJar

import cloudscraper
import requests

from ...constant import (
    AUTH_SCHEME_BEARER,
    TOKEN_KEY,
)
from ..cfg import NvrCfg
from ..errors import NvrConnectionError
from ..logger import NvrLogger
from ..storage import NvrStorage


class NvrSessionDetails:
    """This holds everything needed for the current session with the server.

    It contains:
     - the bearer token, when the server hands one out
     - the connection
     - cookies, where a cookie based session lives
    """
    token: str | None = None
    headers: dict[str, str]

    # Connection Objects.
    connection: cloudscraper.CloudScraper | None = None
    cookies: LWPCookieJar | None = None


class NvrSession:
    """Holds the session credential and moves requests over the connection.

    Two schemes are supported behind the same interface:
     - `cookie`; the server sets a session cookie and the connection sends
       it back on every request. This is the preferred one.
     - `bearer`; the server returns a token at login which we keep in
       storage and send as an `Authorization` header.

    In `cookie` mode a token left over from `bearer` mode is still honoured
    until the server rejects it. Clearing the session wipes both.
    """
    # Session details.
    details: NvrSessionDetails

    # Core objects.
    _cfg: NvrCfg | None = None
    _log: NvrLogger | None = None
    _st: NvrStorage | None = None

    def __init__(self, cfg: NvrCfg, log: NvrLogger, st: NvrStorage, connection=None):
        self.details = NvrSessionDetails()
        self.details.headers = {}

        self._cfg = cfg
        self._log = log.component("session")
        self._st = st

        if connection is None:
            connection = cloudscraper.create_scraper(debug=False)
        self.details.connection = connection

    def load(self):
        """Restore whatever credential survived the last run.

        Nothing here may fail, anonymous is the safe default.
        """
        self.details.token = None
        try:
            self.details.token = self._st.get(TOKEN_KEY, None)
        except Exception as e:
            self._log.debug(f"token not restored {str(e)}")
        self.load_cookies()
        self._log.debug(f"load authenticated={self.is_authenticated}")

    def load_cookies(self):
        self.details.cookies = LWPCookieJar(self._cfg.cookies_file)
        if self._cfg.cookies_file is not None:
            try:
                self.details.cookies.load(ignore_discard=True)
                self.details.cookies.clear_expired_cookies()
            except Exception as _e:
                pass
        self.details.connection.cookies = self.details.cookies
        self._log.vdebug(f"loading cookies={self.details.cookies}")

    def save_cookies(self):
        if self.details.cookies is not None and self._cfg.cookies_file is not None:
            self._log.vdebug(f"saving-cookies={self.details.cookies}")
            try:
                self.details.cookies.save(ignore_discard=True)
            except Exception as e:
                self._log.debug(f"cookies not written {str(e)}")

    def _session_cookie(self) -> str | None:
        if self.details.cookies is None:
            return None
        for cookie in self.details.cookies:
            if cookie.name == self._cfg.session_cookie and not cookie.is_expired():
                return cookie.value
        return None

    @property
    def credential(self) -> str | None:
        """Return what currently proves who we are, or `None`.
        """
        if self._cfg.auth_scheme == AUTH_SCHEME_BEARER:
            return self.details.token
        cookie = self._session_cookie()
        if cookie is not None:
            return cookie
        return self.details.token

    @property
    def is_authenticated(self) -> bool:
        return self.credential is not None

    def set_credential(self, token: str):
        self._log.debug("credential set")
        self.details.token = token
        self._st.set(TOKEN_KEY, token, prefix="session")
        self._st.save()

    def clear(self):
        """Drop every credential we hold, in memory and on disk.
        """
        self._log.debug("clearing")
        self.details.token = None
        self._st.unset(TOKEN_KEY)
        self._st.save()
        if self.details.cookies is not None:
            self.details.cookies.clear()
            self.save_cookies()

    def headers(self) -> dict[str, str]:
        """Build headers for an API request.

        The cookie scheme needs nothing extra, the transport adds the
        cookie itself.
        """
        self.details.headers = {
            "Accept": "application/json",
            "Cache-Control": "no-cache",
        }
        if self.details.token is not None:
            self.details.headers["Authorization"] = f"Bearer {self.details.token}"
        return self.details.headers

    def request_tuple(self, path, method="GET", params=None, headers=None, timeout=None):
        """Send a request and return `(status_code, decoded_body)`.

        A transport failure raises `NvrConnectionError`. A body that isn't
        JSON comes back as `None`.
        """
        if headers is None:
            headers = {}
        if timeout is None:
            timeout = self._cfg.request_timeout

        url = self._cfg.host + path
        self._log.vdebug("request-url={} {}".format(method, url))
        self._log.vdebug("request-params=\n{}".format(pprint.pformat(params)))

        connection = self.details.connection
        try:
            if method == "GET":
                r = connection.get(url, headers=headers, timeout=timeout)
            elif method == "PUT":
                r = connection.put(url, json=params, headers=headers, timeout=timeout)
            elif method == "POST":
                r = connection.post(url, json=params, headers=headers, timeout=timeout)
            elif method == "DELETE":
                r = connection.delete(url, headers=headers, timeout=timeout)
            else:
                raise ValueError(f"unsupported method {method}")
        except requests.RequestException as e:
            self._log.warning("request-error={}".format(type(e).__name__))
            raise NvrConnectionError(str(e)) from e

        try:
            body = r.json()
            self._log.vdebug("request-body=\n{}".format(pprint.pformat(body)))
        except ValueError as e:
            self._log.warning("body-error={}".format(type(e).__name__))
            body = None

        self._log.vdebug("request-end={}".format(r.status_code))
        return r.status_code, body
