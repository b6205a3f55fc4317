"""
User-facing errors of the converter.

The CLI reports DocConvUserError subclasses as one "<class>: <message>" line.
Anything else is a bug and keeps its traceback.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class DocConvUserError(Exception):
    """
    Base class for all user-facing errors of the converter.

    These errors indicate problems that the user can fix:
    wrong arguments, missing files, broken comment blocks, bad config.
    """
    pass


class UsageError(DocConvUserError):
    """Wrong number of positional arguments or an unknown option."""
    pass


class SourceReadError(DocConvUserError):
    """Source file is missing, unreadable or cannot be decoded."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read source file '{path}': {reason}")


class DestinationWriteError(DocConvUserError):
    """Destination file cannot be created or written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write destination file '{path}': {reason}")


class UnterminatedBlockError(DocConvUserError):
    """A comment block was opened but never closed before end of input."""

    def __init__(self, opened_at: int, source: Optional[Path] = None):
        self.opened_at = opened_at
        self.source = source
        where = f"{source}:{opened_at}" if source is not None else f"line {opened_at}"
        super().__init__(f"Comment block opened at {where} is never closed")


class ConfigError(DocConvUserError):
    """Configuration file is missing, malformed or holds invalid values."""
    pass


__all__ = [
    "DocConvUserError",
    "UsageError",
    "SourceReadError",
    "DestinationWriteError",
    "UnterminatedBlockError",
    "ConfigError",
]
