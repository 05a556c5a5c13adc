"""Finding model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .lockfile import LockfileKind

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Finding:
    """A malicious release found pinned in a scanned lockfile."""

    file: Path
    name: str
    version: str
    lockfile_kind: LockfileKind
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def package(self) -> str:
        return f"{self.name}@{self.version}"

    def identity(self) -> tuple[str, str, str, str]:
        """Return the finding without its timestamp, for comparing scan runs."""
        return (str(self.file), self.name, self.version, self.lockfile_kind.value)

    def to_dict(self) -> dict[str, str]:
        return {
            "timestamp": self.timestamp.strftime(TIMESTAMP_FORMAT),
            "file": str(self.file),
            "package": self.name,
            "version": self.version,
            "lockfileType": self.lockfile_kind.value,
        }
