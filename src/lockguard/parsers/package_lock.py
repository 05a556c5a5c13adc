"""Parse npm package-lock.json to capture resolved dependencies."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..errors import MalformedEntryError, ParseError
from ..models import DependencyRecord
from .base import read_lockfile

logger = logging.getLogger(__name__)

NODE_MODULES = "node_modules/"


def package_name_from_key(key: str) -> str | None:
    """Return the installed package name for a ``packages`` key.

    The name is everything after the final ``node_modules/`` segment, so
    ``node_modules/a/node_modules/@scope/b`` gives ``@scope/b``. Keys without
    a ``node_modules/`` segment (the root project, workspace sources) return
    None.
    """
    idx = key.rfind(NODE_MODULES)
    if idx < 0 or (idx > 0 and key[idx - 1] != "/"):
        return None
    name = key[idx + len(NODE_MODULES) :]
    parts = name.split("/")
    if name.startswith("@"):
        valid = len(parts) == 2 and len(parts[0]) > 1 and bool(parts[1])
    else:
        valid = len(parts) == 1 and bool(name)
    if not valid:
        raise MalformedEntryError(key, f"cannot derive a package name from {name!r}")
    return name


def _record_for(key: str, meta: Any, source: Path) -> DependencyRecord | None:
    name = package_name_from_key(key)
    if name is None:
        return None
    if not isinstance(meta, dict):
        raise MalformedEntryError(key, "entry is not an object")
    version = meta.get("version")
    if version is None:
        # link entries and some optional deps carry no version
        logger.debug("%s: %s has no version, skipping", source, key)
        return None
    if not isinstance(version, str) or not version:
        raise MalformedEntryError(key, f"invalid version {version!r}")
    return DependencyRecord(package_key=key, name=name, version=version, source_file=source)


def parse_content(content: str, source: Path) -> list[DependencyRecord]:
    """Return the dependency records of an npm lockfile's ``packages`` map."""
    try:
        data = json.loads(content)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError, oversized integers, nesting past the recursion limit
        raise ParseError(source, f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ParseError(source, "top-level JSON value is not an object")
    packages = data.get("packages")
    if not isinstance(packages, dict):
        raise ParseError(source, "missing 'packages' mapping")

    records: list[DependencyRecord] = []
    for key, meta in packages.items():
        try:
            record = _record_for(key, meta, source)
        except MalformedEntryError as exc:
            logger.warning("%s: skipping malformed entry %s", source, exc)
            continue
        if record is not None:
            records.append(record)

    return records


def parse(path: Path) -> list[DependencyRecord]:
    """Return dependency records from an npm v2+ lockfile."""
    return parse_content(read_lockfile(path), path)
