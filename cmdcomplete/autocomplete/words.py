"""CamelCase word splitting."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = ["break_up_words"]

_UPPERCASE_BOUNDARY = re.compile(r"(?=[A-Z])")


def break_up_words(text: str) -> Iterator[str]:
    """Lazily split text into words, each new word starting at an uppercase letter.

    E.g., "getAllUsers" -> "get", "All", "Users" and "URL" -> "U", "R", "L".
    A leading uppercase letter does not produce an empty first word,
    but the empty string yields a single empty word.

    Args:
        text: The text to split

    Yields:
        The words, in order
    """
    start = 0
    for match in _UPPERCASE_BOUNDARY.finditer(text):
        if match.start() > start:
            yield text[start : match.start()]
            start = match.start()
    yield text[start:]
