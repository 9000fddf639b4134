"""Minimal ANSI coloring for log records and the `tree` output."""

import os
import sys
from typing import TextIO

__all__ = ["BOLD", "CYAN", "DIM", "RED", "RESET", "YELLOW", "colorize", "should_colorize"]

RESET = "\x1b[0m"

# SGR codes, combined with ";"
BOLD = "1"
DIM = "2"
RED = "31"
YELLOW = "33"
CYAN = "36"


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI codes should be written to `stream` (stderr by default).

    NO_COLOR wins over FORCE_COLOR, both win over terminal detection.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    isatty = getattr(stream or sys.stderr, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, *codes: str) -> str:
    """Wrap `text` with the given SGR codes, unchanged when there is none."""
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}{RESET}"
