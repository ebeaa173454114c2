from __future__ import annotations

from typing import Any, Optional


class TierlinkError(Exception):
    """Base class for errors raised by tierlink."""


class MalformedCode(TierlinkError, ValueError):
    def __init__(self, message: str = "invitation code is invalid!"):
        super().__init__(message)


class InvalidParameter(TierlinkError, ValueError):
    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value
        super().__init__(f"{name} is invalid! (got {value!r})")


class UnknownRole(TierlinkError, ValueError):
    def __init__(self, role: Any):
        self.role = role
        super().__init__(f"unknown role: {role!r}")


class RemoteDiscoveryFailure(TierlinkError, RuntimeError):
    """The uptime API answered with ``success: false``."""

    def __init__(self, error: Optional[str], message: Optional[str]):
        self.error = error
        self.message = message
        super().__init__(f"{error}, {message}")
