from __future__ import annotations

import threading
from enum import IntEnum

from .core import NvrCore


class NvrPollerState(IntEnum):
    STOPPED = 0,
    RUNNING = 1,


class NvrPoller:
    """A job that runs now and then every `interval` seconds.

    There are two states and `start`/`stop` are the only ways between
    them. The background job id only exists while RUNNING, so starting
    twice can't queue a second job and stopping while stopped does nothing.
    """

    _core: NvrCore

    def __init__(self, core: NvrCore, name: str, callback, interval: float):
        self._core = core
        self._log = core.log.component("poller")
        self._name = name
        self._callback = callback
        self._interval = interval
        self._lock = threading.Lock()
        self._state = NvrPollerState.STOPPED
        self._job_id = None

    def __repr__(self):
        return "<NvrPoller:{0}:{1}>".format(self._name, self._state.name)

    def _tick(self):
        self._log.vdebug(f"{self._name} tick")
        self._callback()

    def start(self) -> bool:
        """Start polling. Returns `False` if it was already running."""
        with self._lock:
            if self._state == NvrPollerState.RUNNING:
                return False
            self._job_id = self._core.bg.run_now_and_every(self._tick, self._interval)
            self._state = NvrPollerState.RUNNING
        self._log.debug(f"{self._name} started every {self._interval}s")
        return True

    def stop(self) -> bool:
        """Stop polling. Returns `False` if it wasn't running.

        A tick already under way finishes but isn't scheduled again.
        """
        with self._lock:
            if self._state == NvrPollerState.STOPPED:
                return False
            self._core.bg.cancel(self._job_id)
            self._job_id = None
            self._state = NvrPollerState.STOPPED
        self._log.debug(f"{self._name} stopped")
        return True

    @property
    def state(self) -> NvrPollerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == NvrPollerState.RUNNING

    @property
    def job_id(self):
        return self._job_id

    @property
    def interval(self) -> float:
        return self._interval
