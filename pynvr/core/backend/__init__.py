from __future__ import annotations

import threading

from ...constant import (
    LOGIN_PATH,
    LOGOUT_PATH,
    MSG_INVALID_CREDENTIALS,
    MSG_SERVER_CONNECTION_ERROR,
)
from ..cfg import NvrCfg
from ..errors import (
    NvrConnectionError,
    NvrNoCredentialError,
    NvrSessionExpiredError,
)
from ..logger import NvrLogger
from ..storage import NvrStorage
from .envelope import NvrResponse
from .session import NvrSession


class NvrBackEnd:
    """How we talk to the server.

    Every call goes through `_request` which:
     - refuses to go out without a credential
     - turns a 401 into a forced logout
     - decodes the `{success, data, error}` envelope

    Application failures are not special, they come back as envelopes with
    `success` set to `False`.
    """

    _cfg: NvrCfg
    _log: NvrLogger
    _st: NvrStorage

    # This holds the credential and the connection.
    _req: NvrSession | None = None

    def __init__(self, cfg: NvrCfg, log: NvrLogger, st: NvrStorage, connection=None, navigate=None):

        self._cfg = cfg
        self._log = log.component("backend")
        self._st = st
        self._navigate = navigate
        self._logout_cbs = []
        self._lock = threading.Lock()

        # Restore the persistent session information.
        self._req = NvrSession(cfg, log, st, connection)
        self._req.load()
        if not self._req.is_authenticated:
            self._log.debug("starting anonymous")

    def _terminate(self, reason):
        """Drop the session locally and send the user to the login page.

        Never raises, this is called from error paths.
        """
        self._log.info(f"session terminated: {reason}")
        try:
            self._req.clear()
        except Exception as e:
            self._log.warning(f"clear failed: {type(e).__name__}")

        with self._lock:
            cbs = list(self._logout_cbs)
        for cb in cbs:
            try:
                cb()
            except Exception as e:
                self._log.warning(f"logout callback failed: {type(e).__name__}")

        if self._navigate is not None:
            try:
                self._navigate(self._cfg.login_path)
            except Exception as e:
                self._log.warning(f"navigation failed: {type(e).__name__}")
        else:
            self._log.debug(f"navigate to {self._cfg.login_path}")

    def _request(self, path, method, params=None) -> NvrResponse:
        if self._req.credential is None:
            self._log.warning(f"no credential for {method} {path}")
            self._terminate("no credential")
            raise NvrNoCredentialError(f"{method} {path}: no credential")

        code, body = self._req.request_tuple(path, method, params, self._req.headers())
        if code == 401:
            self._terminate("unauthorized")
            raise NvrSessionExpiredError(f"{method} {path}: unauthorized")
        if body is None and not 200 <= code < 300:
            self._log.debug(f"{method} {path} failed: {code} with no usable body")
            return NvrResponse(False, None, f"HTTP {code}")
        if body is None:
            raise NvrConnectionError(f"{method} {path}: no usable body, status={code}")

        response = NvrResponse.from_json(body)
        if not response.success:
            self._log.debug(f"{method} {path} failed: {code} - {response.error}")
        return response

    def get(self, path) -> NvrResponse:
        self._log.vdebug(f"get {path}")
        return self._request(path, "GET")

    def post(self, path, body=None) -> NvrResponse:
        self._log.vdebug(f"post {path}")
        return self._request(path, "POST", body)

    def put(self, path, body) -> NvrResponse:
        self._log.vdebug(f"put {path}")
        return self._request(path, "PUT", body)

    def delete(self, path) -> NvrResponse:
        self._log.vdebug(f"delete {path}")
        return self._request(path, "DELETE")

    def login(self, username=None, password=None) -> str | None:
        """Log in with a username and password.

        Returns `None` on success or the message to show on failure. The
        server either returns a token, which we keep, or sets a session
        cookie on the connection, which we save.
        """
        if username is None:
            username = self._cfg.username
        if password is None:
            password = self._cfg.password
        self._log.debug(f"logging in as {username}")

        try:
            code, body = self._req.request_tuple(
                LOGIN_PATH, "POST", {"username": username, "password": password}, {}
            )
        except NvrConnectionError:
            return MSG_SERVER_CONNECTION_ERROR

        body = body if isinstance(body, dict) else {}
        if 200 <= code < 300:
            token = body.get("token", None)
            if token is not None:
                self._req.set_credential(token)
            self._req.save_cookies()
            if self._req.is_authenticated:
                self._log.info("logged in")
                return None
            self._log.warning("login answered without a credential")

        error = body.get("error", None) or MSG_INVALID_CREDENTIALS
        self._log.error(f"login failed: {code} - {error}")
        return error

    def logout(self):
        """Explicit logout.

        Ask the server to revoke the session, best effort, then forget it
        locally. Never raises.
        """
        self._log.debug("trying to logout")
        if self._req.credential is not None:
            try:
                self._req.request_tuple(LOGOUT_PATH, "POST", None, self._req.headers())
            except Exception as e:
                self._log.warning(f"revoke failed: {type(e).__name__}")
        self._terminate("logout")

    def add_logout_callback(self, callback):
        """Run `callback()` every time the session ends, forced or not."""
        with self._lock:
            self._logout_cbs.append(callback)

    @property
    def session(self) -> NvrSession:
        return self._req

    @property
    def is_authenticated(self) -> bool:
        return self._req.is_authenticated

    def set_credential(self, token: str):
        self._req.set_credential(token)
