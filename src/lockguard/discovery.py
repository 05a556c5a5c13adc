"""Lockfile discovery utilities."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .detector import LOCKFILE_NAMES

EXCLUDES = frozenset({".git"})


def discover_lockfiles(root: Path, excludes: Iterable[str] = ()) -> list[Path]:
    """Find lockfiles recursively under root, sorted for a stable scan order.

    Targets are package-lock.json, pnpm-lock.yaml and yarn.lock. Directories
    named in ``excludes`` (in addition to ``.git``) are skipped at any depth.
    ``node_modules`` is searched like any other directory.
    """
    skip = EXCLUDES | set(excludes)
    found: list[Path] = []

    def should_skip(p: Path) -> bool:
        return any(part in skip for part in p.parts[:-1])

    for path in root.rglob("*"):
        if path.name not in LOCKFILE_NAMES:
            continue
        if should_skip(path.relative_to(root)):
            continue
        if not path.is_file():
            continue
        found.append(path)

    return sorted(found)
