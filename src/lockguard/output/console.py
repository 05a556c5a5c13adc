"""Terminal rendering of findings and the scan summary."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from rich.console import Console
from rich.rule import Rule
from rich.theme import Theme

from ..models import Finding, ScanSummary

THEME = Theme(
    {
        "finding": "red",
        "alert": "red bold",
        "hint": "yellow",
        "ok": "green",
    }
)

RECOMMENDED_ACTIONS = (
    "Update the affected packages immediately",
    "Review your code for suspicious behavior",
    "Rotate credentials if they may have been compromised",
)


def make_console() -> Console:
    return Console(theme=THEME, highlight=False)


def print_findings(findings: Iterable[Finding], console: Console | None = None) -> None:
    console = console or make_console()
    for finding in findings:
        console.print(
            f"FOUND: {finding.package} in {finding.file}",
            style="finding",
            markup=False,
            soft_wrap=True,
        )


def print_summary(
    summary: ScanSummary,
    csv_path: Path | None = None,
    log_path: Path | None = None,
    console: Console | None = None,
) -> None:
    """Print counts, then either the alert with next steps or an all-clear line."""
    console = console or make_console()
    console.print()
    console.print("SCAN SUMMARY:")
    console.print(Rule(style="dim"))
    console.print(f"Lockfiles analyzed: {summary.files_scanned}")
    console.print(f"Malicious packages found: {summary.findings_count}")
    if summary.files_failed:
        console.print(f"Lockfiles skipped (unparsable): {summary.files_failed}", style="hint")

    if not summary.has_findings:
        console.print("No known malicious packages found", style="ok")
        return

    console.print("MALICIOUS PACKAGES DETECTED", style="alert")
    if csv_path is not None:
        console.print(
            f"Check the detailed report at: {csv_path}", style="hint", markup=False, soft_wrap=True
        )
    if log_path is not None:
        console.print(f"Full log at: {log_path}", style="hint", markup=False, soft_wrap=True)
    console.print()
    console.print("RECOMMENDED ACTIONS:")
    for idx, action in enumerate(RECOMMENDED_ACTIONS, start=1):
        console.print(f"{idx}. {action}")
