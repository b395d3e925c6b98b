from __future__ import annotations

import threading

from .constant import (
    TOAST_ERROR,
    TOAST_INFO,
    TOAST_SEVERITIES,
    TOAST_SUCCESS,
)
from .core import NvrCore
from .core.background import NvrBackground


class NvrToast:
    """A short lived message for the user."""

    def __init__(self, toast_id: int, message: str, severity: str):
        self.id = toast_id
        self.message = message
        self.severity = severity

    def __repr__(self):
        return "<NvrToast:{0}:{1}:{2}>".format(self.id, self.severity, self.message)


class NvrToasts:
    """The feedback queue.

    `show` appends a toast and asks a worker of its own to remove it after
    `cfg.toast_timeout` seconds. Poll ticks run on `core.bg` and can sit in
    a slow request, expiry never queues behind them.
    """

    _core: NvrCore

    def __init__(self, core: NvrCore):
        self._core = core
        self._log = core.log.component("toast")
        self._lock = threading.Lock()
        self._items: list[NvrToast] = []
        self._next_id = 0
        self._callbacks = []
        self._bg = NvrBackground(core.log, name="NvrToastWorker")

    def _notify(self):
        items = self.items
        for cb in list(self._callbacks):
            try:
                cb(items)
            except Exception as e:
                self._log.warning(f"callback failed: {type(e).__name__}")

    def show(self, message: str, severity: str = TOAST_INFO) -> int:
        if severity not in TOAST_SEVERITIES:
            severity = TOAST_INFO
        with self._lock:
            toast_id = self._next_id
            self._next_id += 1
            self._items.append(NvrToast(toast_id, message, severity))
        self._log.debug(f"{severity}: {message}")
        self._bg.run_in(self.dismiss, self._core.cfg.toast_timeout, toast_id=toast_id)
        self._notify()
        return toast_id

    def dismiss(self, toast_id: int):
        with self._lock:
            remaining = [toast for toast in self._items if toast.id != toast_id]
            changed = len(remaining) != len(self._items)
            self._items = remaining
        if changed:
            self._notify()

    def success(self, message: str) -> int:
        return self.show(message, TOAST_SUCCESS)

    def error(self, message: str) -> int:
        return self.show(message, TOAST_ERROR)

    def info(self, message: str) -> int:
        return self.show(message, TOAST_INFO)

    @property
    def items(self) -> list[NvrToast]:
        with self._lock:
            return list(self._items)

    def add_callback(self, callback):
        """Call `callback(items)` whenever the queue changes."""
        self._callbacks.append(callback)

    def stop(self):
        self._bg.stop()
