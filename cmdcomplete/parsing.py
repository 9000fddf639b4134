"""Command line parsing utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import COMMAND_SEPARATORS, DOUBLE_QUOTE, ESCAPE, SEGMENT_SEPARATORS, SPACE

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["BreakupOptions", "breakup_arguments", "last_segment", "last_separator_index"]


@dataclass(frozen=True)
class BreakupOptions:
    """Customize how `breakup_arguments` splits its input."""

    include_separators: bool = False  # runs of separators become arguments of their own
    include_quotes: bool = False  # keep the quote characters in the arguments
    separator: str = SPACE
    quotes: tuple[str, ...] = (DOUBLE_QUOTE,)


_DEFAULT_OPTIONS = BreakupOptions()


def _breakup(arguments: str, accept: Callable[[str], bool], options: BreakupOptions) -> str:
    """Feed each argument found in `arguments` to `accept` until it returns False.

    Returns:
        The unprocessed input, empty if everything was consumed
    """
    in_quote = escaped = in_separators = False
    current: list[str] = []

    def flush() -> bool:
        if not current:
            return True
        argument = "".join(current)
        current.clear()
        return accept(argument)

    for index, char in enumerate(arguments, start=1):
        is_quote = char in options.quotes
        is_separator = char == options.separator

        if escaped and not is_quote and not is_separator:
            # the escape did not apply to anything, keep it
            current.append(ESCAPE)

        if char == ESCAPE:
            escaped = True
            in_separators = False
            continue

        if not escaped and is_quote:
            in_quote = not in_quote
            in_separators = False
            if options.include_quotes:
                current.append(char)
            continue

        if in_quote:
            current.append(char)
        elif not escaped and is_separator:
            if not in_separators and not flush():
                return arguments[index:].lstrip(options.separator)
            in_separators = True
            if options.include_separators:
                current.append(char)
        else:
            if options.include_separators and in_separators and not flush():
                return arguments[index - 1 :]
            in_separators = False
            current.append(char)

        escaped = False

    if escaped:
        current.append(ESCAPE)

    flush()
    return ""


def breakup_arguments(arguments: str, limit: int | None = None, options: BreakupOptions | None = None) -> list[str]:
    """Break up a command line into separate arguments.

    Whitespace separates arguments, a doubly-quoted value is a single argument
    and a backslash escapes quotes and separators.
    E.g., 'grab "a b" c' -> ["grab", "a b", "c"]

    Args:
        arguments: The command line, or the arguments of a command
        limit: Maximum number of arguments, the last one holding the unprocessed input
        options: Splitting options

    Returns:
        The arguments, in order
    """
    options = options or _DEFAULT_OPTIONS
    if limit is not None and limit < 2:
        return [arguments] if arguments else []

    result: list[str] = []

    def accept(argument: str) -> bool:
        result.append(argument)
        return limit is None or len(result) < limit - 1

    rest = _breakup(arguments, accept, options)
    if rest:
        result.append(rest)
    return result


def last_separator_index(line: str) -> int:
    """Find the index of the last command separator (space, pipe or ampersand).

    Returns:
        The index, or -1 if the line has no separator
    """
    return max(line.rfind(separator) for separator in COMMAND_SEPARATORS)


def last_segment(line: str) -> tuple[int, str]:
    """Return the command being typed at the end of a line, and where it starts.

    Commands can be piped or chained, e.g. "grab x | highlight re" -> "highlight re".
    Leading whitespace is skipped, trailing whitespace is kept as it matters for completion.

    Returns:
        Tuple of (offset in line, segment)
    """
    start = max(line.rfind(separator) for separator in SEGMENT_SEPARATORS) + 1
    segment = line[start:].lstrip(SPACE)
    return len(line) - len(segment), segment
