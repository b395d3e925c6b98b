from __future__ import annotations

from .camera import NvrCamera
from .capture import NvrCapture
from .core import NvrCore
from .core.backend import NvrBackEnd
from .core.backend.envelope import NvrResponse
from .core.backend.session import NvrSession
from .core.background import NvrBackground
from .core.cfg import NvrCfg
from .core.errors import (
    NvrAuthError,
    NvrConnectionError,
    NvrError,
    NvrNoCredentialError,
    NvrSessionExpiredError,
)
from .core.logger import NvrLogger
from .core.storage import NvrStorage
from .filters import NvrCameraFilter, camera_matches, filter_cameras
from .location import NvrArea, NvrLocation
from .mosaic import NvrMosaic, NvrMosaicCamera, NvrMosaicShare
from .notification import NvrNotification
from .objects import NvrObjects
from .poller import NvrPoller, NvrPollerState
from .store import NvrStore
from .theme import NvrTheme
from .toast import NvrToast, NvrToasts
from .user import NvrPermission, NvrRole, NvrUser

__version__ = "0.3.0"


class PyNvr:
    """Entry point into the library.

    Build one per server connection. It wires the core components
    together, restores any saved session and, if given a username and
    password and not already logged in, logs in.

    :param navigate: called with the login path whenever the session ends
    :param connection: a `requests` style session to use instead of the
        default cloudscraper one
    :param host: server url, defaults to `http://localhost:8080`
    :param username: login user name
    :param password: login password
    :param auth_scheme: `cookie` or `bearer`, defaults to `cookie`
    :param storage_dir: where the session state and cookies are kept
    :param save_state: set to `False` to keep nothing on disk
    :param toast_timeout: seconds a toast stays up, defaults to 3.5
    :param status_poll_interval: seconds between camera status polls
    :param notification_poll_interval: seconds between notification polls
    :param verbose_debug: very chatty debug output
    """

    def __init__(self, navigate=None, connection=None, **kwargs):
        self._core = NvrCore()
        self._objs = NvrObjects()

        self._core.log = NvrLogger(kwargs.get("verbose_debug", False))
        self._core.cfg = NvrCfg(self._core.log, **kwargs)
        self._core.bg = NvrBackground(self._core.log)
        self._core.st = NvrStorage(self._core.cfg, self._core.log)
        self._core.be = NvrBackEnd(self._core.cfg, self._core.log, self._core.st,
                                   connection=connection, navigate=navigate)

        self._toasts = NvrToasts(self._core)
        self._store = NvrStore(self._core, self._objs, self._toasts)
        self._theme = NvrTheme(self._core)

        # A dead session stops the pollers, they would only fail.
        self._core.be.add_logout_callback(self._store.stop_all)

        if not self.is_authenticated and self._core.cfg.username and self._core.cfg.password:
            self.login()

    def __repr__(self):
        return "<{0}:{1}>".format(self.__class__.__name__, self._core.cfg.host_name)

    def login(self, username=None, password=None) -> str | None:
        """Log in. Returns `None` on success or the message to show."""
        error = self._core.be.login(username, password)
        if error is not None:
            self._core.log.error(f"login failed: {error}")
        return error

    def logout(self):
        self._core.be.logout()

    def load_all(self):
        self._store.load_all()

    def stop(self):
        """Stop polling and the background workers. The object is done after this."""
        self._store.stop_all()
        self._toasts.stop()
        self._core.bg.stop()

    @property
    def is_authenticated(self) -> bool:
        return self._core.be.is_authenticated

    @property
    def store(self) -> NvrStore:
        return self._store

    @property
    def toasts(self) -> NvrToasts:
        return self._toasts

    @property
    def theme(self) -> NvrTheme:
        return self._theme

    @property
    def cfg(self) -> NvrCfg:
        return self._core.cfg

    @property
    def core(self) -> NvrCore:
        return self._core

    @property
    def cameras(self) -> list[NvrCamera]:
        return self._store.cameras

    @property
    def filtered_cameras(self) -> list[NvrCamera]:
        return self._store.filtered_cameras

    @property
    def last_error(self) -> str | None:
        return self._core.log.last_error
