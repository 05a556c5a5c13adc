"""Classify discovered files into lockfile kinds by file name."""

from __future__ import annotations

from pathlib import Path

from .models import LockfileHandle, LockfileKind

LOCKFILE_NAMES: dict[str, LockfileKind] = {
    "package-lock.json": LockfileKind.NPM,
    "yarn.lock": LockfileKind.YARN,
    "pnpm-lock.yaml": LockfileKind.PNPM,
}


def detect_kind(path: Path | str) -> LockfileKind:
    """Return the lockfile kind for ``path``, judged only by its final segment."""
    return LOCKFILE_NAMES.get(Path(path).name, LockfileKind.UNKNOWN)


def detect(path: Path | str) -> LockfileHandle:
    return LockfileHandle(path=Path(path), kind=detect_kind(path))
