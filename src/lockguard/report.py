"""Result aggregation and schema-friendly output."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .models import Finding, ScanSummary


class ScanReport:
    """Ordered findings and summary counters for one scan invocation.

    Findings are kept in the order they are recorded: files in discovery
    order, entries in the order the parser emitted them. Nothing is
    deduplicated or sorted here; consumers may sort for display.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = root
        self._findings: list[Finding] = []
        self._summary = ScanSummary()
        self._failed: list[Path] = []
        self._lock = threading.Lock()

    def record_file(self, path: Path, findings: Iterable[Finding]) -> None:
        """Count ``path`` as scanned and append its findings."""
        batch = list(findings)
        with self._lock:
            self._summary.files_scanned += 1
            self._findings.extend(batch)
            self._summary.findings_count += len(batch)

    def record_failure(self, path: Path) -> None:
        """Count ``path`` as scanned but skipped because it could not be parsed."""
        with self._lock:
            self._summary.files_scanned += 1
            self._summary.files_failed += 1
            self._failed.append(path)

    @property
    def findings(self) -> tuple[Finding, ...]:
        with self._lock:
            return tuple(self._findings)

    @property
    def failed_files(self) -> tuple[Path, ...]:
        with self._lock:
            return tuple(self._failed)

    @property
    def summary(self) -> ScanSummary:
        with self._lock:
            return ScanSummary(
                files_scanned=self._summary.files_scanned,
                findings_count=self._summary.findings_count,
                files_failed=self._summary.files_failed,
            )

    @property
    def has_findings(self) -> bool:
        return self.summary.has_findings

    def to_dict(self) -> dict[str, Any]:
        """Return the report as a JSON-serialisable mapping."""
        summary = self.summary
        return {
            "version": "1",
            "root": str(self.root) if self.root is not None else None,
            "hasFindings": summary.has_findings,
            "totals": summary.to_dict(),
            "findings": [finding.to_dict() for finding in self.findings],
            "failedFiles": [str(path) for path in self.failed_files],
        }
