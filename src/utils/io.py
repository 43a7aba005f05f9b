"""I/O helpers for puzzle text."""

import sys
from pathlib import Path
from typing import Optional


def read_text(path: Optional[Path] = None) -> str:
    """Read a whole file, or standard input when no path is given."""
    if path is None:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")
