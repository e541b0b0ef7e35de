"""Exception types raised by the listing engine."""

from __future__ import annotations


class LuhutError(Exception):
    """Base class for errors surfaced to the command line."""


class ConfigError(LuhutError):
    """Raised when listing options are inconsistent or out of range."""


class InvalidTargetError(LuhutError):
    """Raised when the listing target does not exist or is not a directory."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class LayoutTooSmallError(LuhutError):
    """Raised when even minimum column widths cannot fit the terminal."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"table needs at least {required} columns, terminal has {available}")
        self.required = required
        self.available = available
