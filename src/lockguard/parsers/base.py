"""Helpers shared by the lockfile parsers."""

from __future__ import annotations

from pathlib import Path

from ..errors import ParseError


def read_lockfile(path: Path) -> str:
    """Return the text of ``path`` or raise ParseError if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8 text ({exc.reason})") from exc
    except OSError as exc:
        raise ParseError(path, f"cannot read file: {exc.strerror or exc}") from exc
