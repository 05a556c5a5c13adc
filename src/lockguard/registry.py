"""Registry of package releases to detect.

The registry is built once per scan and only read afterwards, so it can be
shared freely between parsing workers.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Iterator

from .models import MatchSpec

logger = logging.getLogger(__name__)

# Releases published during the September 2025 npm account takeover.
DEFAULT_MATCH_LIST: tuple[str, ...] = (
    "debug@4.4.2",
    "chalk@5.6.1",
    "ansi-styles@6.2.2",
    "ansi-regex@6.2.1",
    "strip-ansi@7.1.1",
    "supports-color@10.2.1",
    "wrap-ansi@9.0.1",
    "slice-ansi@7.1.1",
    "color@5.0.1",
    "color-convert@3.1.1",
    "color-string@2.1.1",
    "color-name@2.0.1",
    "is-arrayish@0.3.3",
    "simple-swizzle@0.2.3",
    "error-ex@1.3.3",
    "has-ansi@6.0.1",
    "chalk-template@1.1.1",
    "backslash@0.2.1",
)


class MatchRegistry:
    """Exact-match lookup from package name to flagged versions."""

    def __init__(self, specs: Iterable[MatchSpec]) -> None:
        index: dict[str, set[str]] = defaultdict(set)
        ordered: list[MatchSpec] = []
        duplicates = 0
        for spec in specs:
            if spec.version in index[spec.name]:
                duplicates += 1
                continue
            index[spec.name].add(spec.version)
            ordered.append(spec)
        if duplicates:
            logger.debug("Ignored %d duplicate match spec(s)", duplicates)

        self._index: dict[str, frozenset[str]] = {
            name: frozenset(versions) for name, versions in index.items()
        }
        self._specs: tuple[MatchSpec, ...] = tuple(ordered)

    def __len__(self) -> int:
        return len(self._specs)

    def __iter__(self) -> Iterator[MatchSpec]:
        return iter(self._specs)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, MatchSpec):
            return False
        return self.contains(item.name, item.version)

    def contains(self, name: str, version: str) -> bool:
        return version in self._index.get(name, frozenset())

    def to_mapping(self) -> dict[str, list[str]]:
        return {name: sorted(versions) for name, versions in sorted(self._index.items())}

    @classmethod
    def from_strings(cls, entries: Iterable[str]) -> MatchRegistry:
        return cls(MatchSpec.parse(entry) for entry in entries)

    @classmethod
    def default(cls) -> MatchRegistry:
        return cls.from_strings(DEFAULT_MATCH_LIST)
