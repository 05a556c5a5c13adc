"""Dependency record model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DependencyRecord:
    """One dependency entry extracted from a lockfile.

    ``package_key`` keeps the identifier exactly as the lockfile spells it
    (``node_modules/a/node_modules/@scope/b``, ``"chalk@^5.6.1"``,
    ``/ansi-regex@6.2.1``); ``name`` and ``version`` are the normalised values
    used for matching.
    """

    package_key: str
    name: str
    version: str
    source_file: Path

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must be non-empty")
        if not self.version:
            raise ValueError("Dependency version must be non-empty")
