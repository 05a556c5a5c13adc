"""Cross-reference dependency records against the match registry."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import DependencyRecord, Finding, LockfileKind
from .registry import MatchRegistry


def is_match(record: DependencyRecord, registry: MatchRegistry) -> bool:
    """Exact, case-sensitive comparison of name and version; no range logic."""
    return registry.contains(record.name, record.version)


def match_records(
    records: Iterable[DependencyRecord],
    registry: MatchRegistry,
    kind: LockfileKind,
) -> Iterator[Finding]:
    """Yield a Finding for each matching record, in the order given."""
    for record in records:
        if is_match(record, registry):
            yield Finding(
                file=record.source_file,
                name=record.name,
                version=record.version,
                lockfile_kind=kind,
            )
