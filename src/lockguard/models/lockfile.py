"""Lockfile kind and handle models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class LockfileKind(str, Enum):
    """Lockfile flavours; the value is what reports print as ``lockfile_type``."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LockfileHandle:
    """A discovered file paired with the lockfile kind detected for it."""

    path: Path
    kind: LockfileKind

    @property
    def is_known(self) -> bool:
        return self.kind is not LockfileKind.UNKNOWN
