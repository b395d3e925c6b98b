from __future__ import annotations

from .backend import NvrBackEnd
from .background import NvrBackground
from .cfg import NvrCfg
from .logger import NvrLogger
from .storage import NvrStorage


class NvrCore:
    """These are the core functionality of the library.

    They provide access to:
     - NvrBackEnd; how we speak to the server
     - NvrBackground; how we queue jobs to run
     - NvrCfg; how we get configuration
     - NvrLogger; how we get logs
     - NvrStorage; how we persist the session and theme

    The store, toasts and pollers take `NvrCore` rather than individual
    components. These components know nothing about cameras or mosaics.
    One instance is built per `PyNvr`, nothing here is shared globally.
    """

    be: NvrBackEnd | None = None
    bg: NvrBackground | None = None
    cfg: NvrCfg | None = None
    log: NvrLogger | None = None
    st: NvrStorage | None = None
