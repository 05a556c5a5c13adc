"""Exception hierarchy shared by the scanner and its wrappers."""

from __future__ import annotations

from pathlib import Path


class LockguardError(RuntimeError):
    """Base error for all lockguard failures."""


class InvalidInputError(LockguardError):
    """Raised when the directory to scan does not exist or is not a directory."""


class ParseError(LockguardError):
    """Raised when a lockfile cannot be read or has the wrong overall shape."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class MalformedEntryError(LockguardError):
    """Raised when a single lockfile entry is missing required fields."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"{key!r}: {reason}")
        self.key = key
        self.reason = reason


class MatchListError(LockguardError):
    """Raised when an alternative match list cannot be fetched or parsed."""
