"""Data models shared by the parsers, matcher and report."""

from __future__ import annotations

from .dependency_record import DependencyRecord
from .finding import Finding
from .lockfile import LockfileHandle, LockfileKind
from .match_spec import MatchSpec
from .scan_summary import ScanSummary

__all__ = [
    "DependencyRecord",
    "Finding",
    "LockfileHandle",
    "LockfileKind",
    "MatchSpec",
    "ScanSummary",
]
