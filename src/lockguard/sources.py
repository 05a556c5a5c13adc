"""Match list source resolution and loading.

The scan uses the embedded reference list unless another source is supplied
on the command line or through ``LOCKGUARD_MATCH_LIST``. A source is a
filesystem path or an ``http(s)://`` URL holding either JSON (validated
against ``MATCH_LIST_SCHEMA``) or plain text with one ``name@version`` per
line.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import requests
from jsonschema import Draft202012Validator
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .errors import MatchListError
from .models import MatchSpec
from .registry import MatchRegistry

logger = logging.getLogger(__name__)

MATCH_LIST_ENV_VAR = "LOCKGUARD_MATCH_LIST"

_VERSIONS = {"type": "array", "items": {"type": "string", "minLength": 1}}

MATCH_LIST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "oneOf": [
        {
            "type": "object",
            "required": ["packages"],
            "properties": {
                "packages": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["name", "versions"],
                        "properties": {
                            "name": {"type": "string", "minLength": 1},
                            "versions": _VERSIONS,
                        },
                    },
                },
            },
        },
        {
            "type": "object",
            "not": {"required": ["packages"]},
            "additionalProperties": _VERSIONS,
        },
        {
            "type": "array",
            "items": {"type": "string", "pattern": r"^\S+@\S+$"},
        },
    ],
}


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str) -> Response:
    return requests.get(url, timeout=10)


def _fetch(source: str) -> str:
    if source.startswith("http://") or source.startswith("https://"):
        try:
            response = _http_get(source)
            response.raise_for_status()
            return response.text
        except requests.RequestException as exc:
            raise MatchListError(f"Failed to fetch match list from {source}: {exc}") from exc

    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MatchListError(f"Failed to read match list {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MatchListError(f"Match list {path} is not UTF-8 text") from exc


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_payload(data: Any) -> None:
    """Raise MatchListError when ``data`` does not follow MATCH_LIST_SCHEMA."""
    validator = Draft202012Validator(MATCH_LIST_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise MatchListError("Match list failed validation:\n" + _format_errors(errors))


def _specs_from_json(data: Any) -> list[MatchSpec]:
    validate_payload(data)
    if isinstance(data, list):
        return [MatchSpec.parse(entry) for entry in data]
    if "packages" in data:
        return [
            MatchSpec(name=entry["name"], version=version)
            for entry in data["packages"]
            for version in entry["versions"]
        ]
    return [
        MatchSpec(name=name, version=version)
        for name, versions in data.items()
        for version in versions
    ]


def _specs_from_text(text: str) -> list[MatchSpec]:
    specs = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            specs.append(MatchSpec.parse(line))
        except ValueError as exc:
            raise MatchListError(f"Line {lineno}: {exc}") from exc
    return specs


def parse_match_list(text: str) -> list[MatchSpec]:
    """Parse match list content, auto-detecting JSON versus plain text."""
    stripped = text.lstrip()
    if stripped.startswith(("{", "[")):
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise MatchListError(f"Invalid JSON in match list: {exc}") from exc
        try:
            return _specs_from_json(data)
        except ValueError as exc:
            raise MatchListError(str(exc)) from exc
    return _specs_from_text(text)


def resolve_source(source: str | None = None) -> str | None:
    """Return the match list source to use.

    Priority:
    1. Explicit source argument
    2. LOCKGUARD_MATCH_LIST environment variable
    3. None, meaning the embedded reference list
    """
    if source:
        return source
    env_source = os.environ.get(MATCH_LIST_ENV_VAR, "").strip()
    return env_source or None


def load_registry(source: str | None = None) -> MatchRegistry:
    """Build the registry for a scan run.

    Raises:
        MatchListError: If the source cannot be fetched, read or parsed, or
            holds no entries.
    """
    resolved = resolve_source(source)
    if resolved is None:
        return MatchRegistry.default()

    logger.debug("Loading match list from %s", resolved)
    specs = parse_match_list(_fetch(resolved))
    if not specs:
        raise MatchListError(f"Match list {resolved} contains no entries")
    registry = MatchRegistry(specs)
    logger.debug("Loaded %d match spec(s): %s", len(registry), registry.to_mapping())
    return registry
