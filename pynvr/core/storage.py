from __future__ import annotations

import pickle
import threading

from .cfg import NvrCfg
from .logger import NvrLogger


class NvrStorage:
    """A small persistent key/value store.

    It plays the part a browser's local storage does for the web client:
    it keeps the session token and the theme across restarts. Values live
    in memory and are pickled to `cfg.state_file` on `save()`. With no
    state file nothing is written.
    """

    _cfg: NvrCfg
    _log: NvrLogger
    _state_file: str | None

    def __init__(self, cfg: NvrCfg, log: NvrLogger):
        self._cfg = cfg
        self._log = log.component("storage")
        self._state_file = self._cfg.state_file
        self._db = {}
        self._lock = threading.Lock()
        self.load()
        self._log.debug("created")

    def _ekey(self, key):
        return key if not isinstance(key, list) else "/".join(key)

    def load(self):
        if self._state_file is not None:
            try:
                with self._lock:
                    with open(self._state_file, "rb") as dump:
                        self._db = pickle.load(dump)
            except Exception:
                self._log.debug("file not read")

    def save(self):
        if self._state_file is not None:
            try:
                with self._lock:
                    with open(self._state_file, "wb") as dump:
                        pickle.dump(self._db, dump)
            except Exception:
                self._log.warning("file not written")

    def get(self, key, default=None):
        with self._lock:
            return self._db.get(self._ekey(key), default)

    def set(self, key, value, prefix="storage"):
        ekey = self._ekey(key)
        output = "set:" + ekey + "=" + str(value)
        self._log.vdebug(f"{prefix}: {output[:80]}")
        with self._lock:
            self._db[ekey] = value
            return value

    def unset(self, key):
        with self._lock:
            self._db.pop(self._ekey(key), None)

    def clear(self):
        with self._lock:
            self._db = {}
