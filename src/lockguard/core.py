"""Core scanning entrypoints.

This module has no terminal or file-output concerns so it can be driven from
the console script as well as from other tooling.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .detector import detect
from .discovery import discover_lockfiles
from .errors import InvalidInputError, ParseError
from .matcher import match_records
from .models import Finding
from .parsers import parse_lockfile
from .registry import MatchRegistry
from .report import ScanReport

logger = logging.getLogger(__name__)


def validate_root(root: Path) -> Path:
    """Return ``root`` if it is an existing directory, else raise InvalidInputError."""
    if not root.exists():
        raise InvalidInputError(f"Directory '{root}' does not exist")
    if not root.is_dir():
        raise InvalidInputError(f"'{root}' is not a directory")
    return root


def scan_file(path: Path, registry: MatchRegistry) -> list[Finding] | None:
    """Parse one lockfile and return its findings.

    Returns None when the file is not a recognised lockfile. ParseError
    propagates to the caller.
    """
    handle = detect(path)
    if not handle.is_known:
        logger.debug("Skipping unrecognised file %s", path)
        return None

    logger.debug("Analyzing: %s", path)
    records = parse_lockfile(handle)
    findings = list(match_records(records, registry, handle.kind))
    logger.debug("%s: %d entries, %d findings", path, len(records), len(findings))
    return findings


def _scan_one(path: Path, registry: MatchRegistry) -> list[Finding] | ParseError | None:
    try:
        return scan_file(path, registry)
    except ParseError as exc:
        return exc


def scan_paths(
    paths: Iterable[Path],
    registry: MatchRegistry,
    report: ScanReport | None = None,
    workers: int = 1,
) -> ScanReport:
    """Scan ``paths`` and record the results in ``report`` in the given order.

    With ``workers`` above one, files are parsed on a bounded thread pool; the
    results are still recorded in input order so the findings sequence is the
    same as for a sequential run.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")
    report = report if report is not None else ScanReport()
    paths = list(paths)

    if workers == 1 or len(paths) < 2:
        outcomes = (_scan_one(path, registry) for path in paths)
        _record(report, paths, outcomes)
    else:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = pool.map(lambda p: _scan_one(p, registry), paths)
            _record(report, paths, outcomes)

    return report


def _record(report: ScanReport, paths: list[Path], outcomes: Iterable) -> None:
    for path, outcome in zip(paths, outcomes):
        if outcome is None:
            continue
        if isinstance(outcome, ParseError):
            logger.warning("Skipping %s: %s", path, outcome.reason)
            report.record_failure(path)
            continue
        for finding in outcome:
            logger.warning(
                "MALICIOUS DETECTED: %s in %s", finding.package, finding.file
            )
        report.record_file(path, outcome)


def scan_directory(
    root: Path,
    registry: MatchRegistry | None = None,
    excludes: Iterable[str] = (),
    workers: int = 1,
) -> ScanReport:
    """Scan a directory tree for lockfiles pinning malicious releases.

    Params:
        root: directory to scan recursively
        registry: releases to detect; defaults to the embedded reference list
        excludes: extra directory names to skip during discovery
        workers: number of parsing threads

    Raises:
        InvalidInputError: If ``root`` does not exist or is not a directory.
    """
    validate_root(root)
    registry = registry if registry is not None else MatchRegistry.default()

    logger.info("Starting scan in directory: %s", root)
    logger.info("Looking for %d known malicious packages", len(registry))

    paths = discover_lockfiles(root, excludes=excludes)
    report = scan_paths(paths, registry, ScanReport(root=root), workers=workers)

    summary = report.summary
    logger.info(
        "Scan completed - %d lockfile(s), %d finding(s)",
        summary.files_scanned,
        summary.findings_count,
    )
    return report
