"""CSV report writer."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from pathlib import Path

from ..models import Finding
from ..models.finding import TIMESTAMP_FORMAT

CSV_HEADER = ("timestamp", "file", "package", "version", "lockfile_type")


def write_csv(path: Path, findings: Iterable[Finding]) -> int:
    """Write one row per finding under the header; return the row count.

    The file is always created, so an empty scan leaves a header-only report.
    """
    rows = 0
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        for finding in findings:
            writer.writerow(
                (
                    finding.timestamp.strftime(TIMESTAMP_FORMAT),
                    str(finding.file),
                    finding.name,
                    finding.version,
                    finding.lockfile_kind.value,
                )
            )
            rows += 1
    return rows
