"""Human-readable summary rendering for $GITHUB_STEP_SUMMARY."""

from __future__ import annotations

from .report import ScanReport


def render_summary(report: ScanReport) -> str:
    """Return a Markdown string with totals and a table of malicious packages."""
    summary = report.summary
    findings = report.findings

    lines = []
    lines.append("# lockguard Summary")
    lines.append("")
    lines.append(
        f"Lockfiles analyzed: {summary.files_scanned} | Findings: {summary.findings_count}"
    )
    if summary.files_failed:
        lines.append("")
        lines.append(f"Lockfiles skipped (unparsable): {summary.files_failed}")
    lines.append("")
    lines.append("| Lockfile | Type | Package | Version |")
    lines.append("| --- | --- | --- | --- |")

    if not findings:
        lines.append("| (all lockfiles) | n/a | No malicious packages | n/a |")

    for finding in findings:
        lines.append(
            f"| {finding.file} | {finding.lockfile_kind.value} | {finding.name} | {finding.version} |"
        )

    return "\n".join(lines) + "\n"
