"""Command-line entrypoint: scan a directory and write the reports."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from rich.console import Console

from . import __version__
from .core import scan_directory, validate_root
from .errors import InvalidInputError, MatchListError
from .logging_setup import close_logging, default_log_path, setup_logging
from .output import print_findings, print_summary, write_csv
from .output.console import make_console
from .report import ScanReport
from .sources import MATCH_LIST_ENV_VAR, load_registry
from .summary import render_summary

DEFAULT_CSV = Path("malicious_packages_report.csv")
WARN_ONLY_ENV_VAR = "LOCKGUARD_WARN_ONLY"
WORKERS_ENV_VAR = "LOCKGUARD_WORKERS"
_TRUTHY = {"1", "true", "yes", "y"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lockguard",
        description=(
            "Detect known-malicious package versions in package-lock.json, "
            "yarn.lock and pnpm-lock.yaml files."
        ),
        epilog="If no directory is specified, the current one (.) is used.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        type=Path,
        default=Path("."),
        metavar="DIRECTORY",
        help="Directory to scan recursively",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--list",
        dest="list_source",
        default=None,
        metavar="SOURCE",
        help=f"Path or URL of an alternative match list (env: {MATCH_LIST_ENV_VAR})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_CSV,
        metavar="CSV",
        help=f"CSV report path (default: {DEFAULT_CSV})",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Log file path (default: scan_<timestamp>.log)",
    )
    parser.add_argument(
        "--json",
        dest="json_path",
        type=Path,
        default=None,
        metavar="PATH",
        help="Also write the report as JSON",
    )
    parser.add_argument(
        "--summary-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Append a Markdown summary (default: $GITHUB_STEP_SUMMARY when set)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Directory name to skip; may be repeated",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        metavar="N",
        help=f"Number of parsing threads (env: {WORKERS_ENV_VAR}, default: 1)",
    )
    parser.add_argument(
        "--warn-only",
        action="store_true",
        help=f"Exit 0 even when findings exist (env: {WARN_ONLY_ENV_VAR})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.workers is None:
        raw = os.getenv(WORKERS_ENV_VAR, "").strip()
        try:
            args.workers = int(raw) if raw else 1
        except ValueError:
            parser.error(f"{WORKERS_ENV_VAR} must be an integer, got {raw!r}")
    if args.workers < 1:
        parser.error("the number of workers must be at least 1")

    if args.summary_file is None and os.getenv("GITHUB_STEP_SUMMARY"):
        args.summary_file = Path(os.environ["GITHUB_STEP_SUMMARY"])

    args.warn_only = args.warn_only or _env_flag(WARN_ONLY_ENV_VAR)
    return args


def _write_reports(args: argparse.Namespace, report: ScanReport) -> None:
    write_csv(args.output, report.findings)
    if args.json_path is not None:
        payload = json.dumps(report.to_dict(), indent=2)
        args.json_path.write_text(payload + "\n", encoding="utf-8")
    if args.summary_file is not None:
        with args.summary_file.open("a", encoding="utf-8") as handle:
            handle.write(render_summary(report))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    err = Console(stderr=True)

    try:
        validate_root(args.directory)
    except InvalidInputError as exc:
        err.print(f"Error: {exc}", style="red", markup=False, soft_wrap=True)
        return 1

    log_path = args.log_file or default_log_path()
    try:
        logger = setup_logging(verbose=args.verbose, log_file=log_path)
    except OSError as exc:
        close_logging()
        err.print(f"Error: cannot open log file: {exc}", style="red", markup=False, soft_wrap=True)
        return 1
    try:
        try:
            registry = load_registry(args.list_source)
        except MatchListError as exc:
            logger.error("%s", exc)
            return 1

        report = scan_directory(
            args.directory,
            registry,
            excludes=args.exclude,
            workers=args.workers,
        )

        console = make_console()
        print_findings(report.findings, console=console)
        try:
            _write_reports(args, report)
        except OSError as exc:
            logger.error("Failed to write report: %s", exc)
            return 1

        summary = report.summary
        print_summary(summary, csv_path=args.output, log_path=log_path, console=console)
        if not summary.has_findings:
            logger.info("Scan completed - No threats found")
    finally:
        close_logging()

    if summary.has_findings and not args.warn_only:
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
