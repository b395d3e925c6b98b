from __future__ import annotations

from typing import Any


class NvrResponse:
    """The `{success, data, error}` wrapper every endpoint returns.
    """

    success: bool = False
    data: Any = None
    error: str | None = None

    def __init__(self, success: bool, data: Any = None, error: str | None = None):
        self.success = success
        self.data = data
        self.error = error

    def __repr__(self):
        return f"<NvrResponse:success={self.success},error={self.error}>"

    @classmethod
    def from_json(cls, body) -> NvrResponse:
        if not isinstance(body, dict):
            return cls(False, None, "malformed response")
        return cls(bool(body.get("success", False)), body.get("data", None), body.get("error", None))

    def error_or(self, default: str) -> str:
        """The server's message, or `default` when it didn't send one."""
        return self.error or default
