"""Lockfile parsers, one module per package manager."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from ..models import DependencyRecord, LockfileHandle, LockfileKind
from . import package_lock, pnpm_lock, yarn_lock

ParseFunction: TypeAlias = Callable[[Path], list[DependencyRecord]]

PARSERS: dict[LockfileKind, ParseFunction] = {
    LockfileKind.NPM: package_lock.parse,
    LockfileKind.YARN: yarn_lock.parse,
    LockfileKind.PNPM: pnpm_lock.parse,
}


def parse_lockfile(handle: LockfileHandle) -> list[DependencyRecord]:
    """Parse ``handle`` with the parser for its kind.

    Raises:
        KeyError: If the handle's kind has no parser (``UNKNOWN``).
        ParseError: If the file cannot be read or has the wrong shape.
    """
    return PARSERS[handle.kind](handle.path)
