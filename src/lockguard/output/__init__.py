"""Report writers for the command-line wrapper."""

from .console import print_findings, print_summary
from .csv_report import CSV_HEADER, write_csv

__all__ = [
    "CSV_HEADER",
    "print_findings",
    "print_summary",
    "write_csv",
]
