from .constant import (
    THEME_DARK,
    THEME_KEY,
    THEME_LIGHT,
)
from .core import NvrCore


class NvrTheme:
    """Light or dark, remembered across restarts."""

    def __init__(self, core: NvrCore):
        self._core = core
        saved = self._core.st.get(THEME_KEY, None)
        self._mode = saved if saved in (THEME_LIGHT, THEME_DARK) else THEME_DARK

    @property
    def mode(self):
        return self._mode

    @property
    def is_dark(self):
        return self._mode == THEME_DARK

    def toggle(self):
        self._mode = THEME_LIGHT if self.is_dark else THEME_DARK
        self._core.st.set(THEME_KEY, self._mode, prefix="theme")
        self._core.st.save()
        return self._mode
