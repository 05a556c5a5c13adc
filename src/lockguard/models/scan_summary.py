"""Scan summary counters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScanSummary:
    """Running counters for one scan invocation."""

    files_scanned: int = 0
    findings_count: int = 0
    files_failed: int = 0

    def __post_init__(self) -> None:
        if min(self.files_scanned, self.findings_count, self.files_failed) < 0:
            raise ValueError("Summary counts must be non-negative")

    @property
    def has_findings(self) -> bool:
        return self.findings_count > 0

    def to_dict(self) -> dict[str, int]:
        return {
            "filesScanned": self.files_scanned,
            "findings": self.findings_count,
            "filesFailed": self.files_failed,
        }
