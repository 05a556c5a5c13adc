"""lockguard core package.

Scans a directory tree for npm, Yarn and pnpm lockfiles and reports entries
that pin a known-malicious package release. The scanning logic is callable
from the console script as well as from other Python tooling.
"""

__version__ = "0.3.0"

__all__ = [
    "core",
]
