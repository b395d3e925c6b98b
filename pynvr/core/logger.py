from __future__ import annotations

import logging


_LOGGER = logging.getLogger("pynvr")


class NvrLogger:
    """An all-in-one-place logger.

    An instance is created very early on and passed to all sub-components.
    Each component asks it for a `component()` logger so its messages
    carry the component's name. Errors from every component land in the
    same `last_error`.
    """
    _last_error: str | None = None
    _verbose_debug: bool = False

    def __init__(self, verbose: bool = False, name: str | None = None, root: NvrLogger | None = None):
        self._verbose_debug = verbose
        self._prefix = f"{name}: " if name else ""
        self._root = root if root is not None else self
        if root is None:
            self.debug("logger created")
            self.vdebug("verbose debug enabled")

    def component(self, name: str) -> NvrLogger:
        """Returns a logger that tags every message with `name`."""
        return NvrLogger(self._verbose_debug, name, self._root)

    def error(self, msg):
        self._root._last_error = msg
        _LOGGER.error(self._prefix + msg)

    @property
    def last_error(self) -> str | None:
        """Return the last reported error.
        """
        return self._root._last_error

    def warning(self, msg):
        _LOGGER.warning(self._prefix + msg)

    def info(self, msg):
        _LOGGER.info(self._prefix + msg)

    def debug(self, msg):
        _LOGGER.debug(self._prefix + msg)

    def vdebug(self, msg):
        if self._verbose_debug:
            _LOGGER.debug(self._prefix + msg)
