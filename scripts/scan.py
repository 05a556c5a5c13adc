#!/usr/bin/env python3
"""Local entrypoint to run the scanner from a source checkout.

Usage:
  python scripts/scan.py [-v] [--list path_or_url] [--warn-only] [DIRECTORY]

This calls the same lockguard.cli.main used by the installed console script.
"""

from __future__ import annotations

from lockguard.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
