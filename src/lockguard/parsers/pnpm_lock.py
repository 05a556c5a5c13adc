"""Parse pnpm-lock.yaml to capture resolved dependencies.

The file is scanned line by line rather than loaded as YAML: every package
entry is a key of the form ``name@version:`` (lockfile v6+, optionally with a
leading ``/`` and peer suffixes in parentheses) or ``/name/version:``
(lockfile v5), and nothing else in the file has that shape.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..models import DependencyRecord
from .base import read_lockfile

_NAME = r"(?:@[^@/\s'\"]+/)?[^@/\s'\"()]+"

# "/@scope/name@1.2.3(peer@1.0.0):", "name@1.2.3:", "'@scope/name@1.2.3':"
_AT_KEY_RE = re.compile(
    r"^[ \t]*(?P<quote>['\"]?)"
    r"(?P<key>/?(?P<name>" + _NAME + r")@(?P<version>[^@:\s'\"()]+)(?:\(.*\))?)"
    r"(?P=quote):[ \t]*$"
)

# "/name/1.2.3:", "/@scope/name/1.2.3_peer@1.0.0:"
_SLASH_KEY_RE = re.compile(
    r"^[ \t]*(?P<quote>['\"]?)"
    r"(?P<key>/(?P<name>" + _NAME + r")/(?P<version>\d[^/:\s'\"()_]*)(?:[_(][^:\s]*)?)"
    r"(?P=quote):[ \t]*$"
)


def match_line(line: str) -> tuple[str, str, str] | None:
    """Return ``(key, name, version)`` when ``line`` declares a package entry."""
    match = _AT_KEY_RE.match(line) or _SLASH_KEY_RE.match(line)
    if match is None:
        return None
    return match.group("key"), match.group("name"), match.group("version")


def parse_content(content: str, source: Path) -> list[DependencyRecord]:
    """Return one record per package-entry line, in file order."""
    records: list[DependencyRecord] = []
    for line in content.splitlines():
        found = match_line(line)
        if found is None:
            continue
        key, name, version = found
        records.append(
            DependencyRecord(package_key=key, name=name, version=version, source_file=source)
        )
    return records


def parse(path: Path) -> list[DependencyRecord]:
    """Return dependency records from a pnpm lock file."""
    return parse_content(read_lockfile(path), path)
