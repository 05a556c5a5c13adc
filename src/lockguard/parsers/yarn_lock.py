"""Parse yarn.lock (classic and Berry) to capture resolved dependencies."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from ..errors import MalformedEntryError
from ..models import DependencyRecord
from .base import read_lockfile

logger = logging.getLogger(__name__)

# `version "1.2.3"` (classic), `version: 1.2.3` or `version: "1.2.3"` (Berry)
_VERSION_RE = re.compile(
    r"^(?P<indent>[ \t]+)version:?[ \t]+"
    r"(?P<quote>[\"']?)(?P<version>[^\"'\s]+)(?P=quote)[ \t]*$"
)


def package_name_from_descriptor(descriptor: str) -> str | None:
    """Return the package name of a descriptor such as ``@scope/name@^1.0.0``.

    The name ends at the first ``@`` after an optional leading scope marker,
    so aliases like ``alias@npm:real@^1`` resolve to the declared ``alias``.
    """
    scoped = descriptor.startswith("@")
    idx = descriptor.find("@", 1 if scoped else 0)
    if idx <= 0:
        return None
    name = descriptor[:idx]
    if scoped and "/" not in name:
        return None
    return name


def split_descriptors(header: str) -> list[str]:
    """Split a header line (without its trailing colon) into descriptors."""
    descriptors = []
    for part in header.split(","):
        descriptor = part.strip().strip("\"'").strip()
        if descriptor:
            descriptors.append(descriptor)
    return descriptors


def _is_header(line: str) -> bool:
    return not line[0].isspace() and line.endswith(":")


def _blocks(lines: Iterable[str]) -> Iterator[list[str]]:
    block: list[str] = []
    for raw in lines:
        line = raw.rstrip()
        if not line.strip():
            if block:
                yield block
                block = []
            continue
        if line.lstrip().startswith("#"):
            continue
        # a header right after indented lines starts a new entry
        if block and not line[0].isspace() and block[-1][0].isspace():
            yield block
            block = []
        block.append(line)
    if block:
        yield block


def _block_version(body: list[str]) -> str | None:
    if not body:
        return None
    field_indent = min(len(line) - len(line.lstrip()) for line in body)
    for line in body:
        match = _VERSION_RE.match(line)
        if match and len(match.group("indent")) == field_indent:
            return match.group("version")
    return None


def _parse_block(block: list[str], source: Path) -> list[DependencyRecord]:
    descriptors: list[str] = []
    idx = 0
    while idx < len(block) and _is_header(block[idx]):
        descriptors.extend(split_descriptors(block[idx][:-1]))
        idx += 1

    named = [(d, package_name_from_descriptor(d)) for d in descriptors]
    named = [(d, name) for d, name in named if name]
    if not named:
        # __metadata, stray text
        return []

    version = _block_version(block[idx:])
    if version is None:
        raise MalformedEntryError(descriptors[0], "block has no version line")

    return [
        DependencyRecord(package_key=descriptor, name=name, version=version, source_file=source)
        for descriptor, name in named
    ]


def parse_content(content: str, source: Path) -> list[DependencyRecord]:
    """Return one record per descriptor per block, in file order."""
    records: list[DependencyRecord] = []
    for block in _blocks(content.splitlines()):
        try:
            records.extend(_parse_block(block, source))
        except MalformedEntryError as exc:
            logger.warning("%s: skipping block %s", source, exc)
    return records


def parse(path: Path) -> list[DependencyRecord]:
    """Return dependency records from a yarn lock file."""
    return parse_content(read_lockfile(path), path)
