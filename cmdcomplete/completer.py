"""Line completers driving the matchers.

A `TreeCompleter` completes the command line of one command described by a
matcher tree. A `CommandLineCompleter` completes a whole line: the command
name first, then its arguments using the command's tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .autocomplete import get_autocompleter
from .constants import SPACE
from .logging_setup import get_logger
from .parsing import breakup_arguments, last_segment, last_separator_index

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from .autocomplete import Autocompleter
    from .matchers import CompletionMatcher

__all__ = ["CommandLineCompleter", "CompletionResult", "TreeCompleter"]

log = get_logger("completer")


@dataclass(frozen=True)
class CompletionResult:
    """Candidates for the token ending at the cursor.

    `start` is the index in the line where the completed token starts,
    -1 when there is no candidate.
    """

    start: int = -1
    candidates: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.candidates)


def _unique(completions: Iterable[str]) -> list[str]:
    """Remove duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(completions))


def _collect(node: CompletionMatcher, tokens: list[str]) -> Iterator[str]:
    if not tokens:
        return
    token, *rest = tokens
    if not rest:
        # complete the last (maybe partial) token
        for child in node.children():
            yield from child.completions_for(token)
        return
    # the token is settled, continue with the children it selects
    for child in node.children():
        if child.argument_fully_matched(token):
            yield from _collect(child, rest)


class TreeCompleter:
    """Complete the command line of a single command."""

    def __init__(self, root: CompletionMatcher) -> None:
        """Initialize the completer.

        Args:
            root: Matcher of the command itself, its children match the first argument
        """
        self.root = root

    def complete(self, buffer: str, cursor: int | None = None) -> CompletionResult:
        """Complete the token under the cursor.

        Args:
            buffer: The command line
            cursor: Cursor position, defaults to the end of the line
        """
        prefix = buffer if cursor is None else buffer[:cursor]
        if not self.root.partially_matches(prefix):
            return CompletionResult()

        tokens = breakup_arguments(prefix)
        if prefix.endswith(SPACE):
            tokens.append("")

        candidates = self.completions_for_tokens(tokens[1:])
        log.debug("%r: %d candidate(s) for %r", self.root, len(candidates), prefix)
        if not candidates:
            return CompletionResult()
        return CompletionResult(last_separator_index(prefix) + 1, candidates)

    def completions_for_tokens(self, tokens: list[str]) -> list[str]:
        """Return the completions of the last token, given the arguments typed after the command.

        Args:
            tokens: Arguments following the command, the last one being completed
        """
        return _unique(_collect(self.root, tokens))


class CommandLineCompleter:
    """Complete command names and their arguments.

    Command names are completed with an `Autocompleter` strategy, arguments
    using the matcher tree registered for the command.
    Instances are never modified, use `with_roots` to change the commands.
    """

    def __init__(self, roots: Mapping[str, CompletionMatcher], autocompleter: Autocompleter | None = None) -> None:
        """Initialize the completer.

        Args:
            roots: Command name -> matcher tree of the command
            autocompleter: Strategy used for command names, defaults to the word strategy
        """
        self.autocompleter = autocompleter or get_autocompleter()
        self._trees = {name: TreeCompleter(root) for name, root in roots.items()}
        self._command_names = sorted(self._trees)

    @property
    def command_names(self) -> list[str]:
        """Return the known commands, sorted."""
        return list(self._command_names)

    @property
    def roots(self) -> dict[str, CompletionMatcher]:
        """Return the matcher tree of every command."""
        return {name: tree.root for name, tree in self._trees.items()}

    def with_roots(self, roots: Mapping[str, CompletionMatcher]) -> CommandLineCompleter:
        """Return a new completer for other commands, using the same strategy."""
        return CommandLineCompleter(roots, self.autocompleter)

    def complete(self, buffer: str, cursor: int | None = None) -> CompletionResult:
        """Complete the token under the cursor.

        Args:
            buffer: The command line, possibly holding several piped or chained commands
            cursor: Cursor position, defaults to the end of the line
        """
        prefix = buffer if cursor is None else buffer[:cursor]
        offset, segment = last_segment(prefix)

        if SPACE not in segment:
            candidates = self.autocompleter.completions_for(segment, self._command_names)
            log.debug("%d command(s) for %r", len(candidates), segment)
            return CompletionResult(offset, candidates) if candidates else CompletionResult()

        start = -1
        candidates = []
        for tree in self._trees.values():
            result = tree.complete(segment)
            if result:
                start = offset + result.start
                candidates.extend(result.candidates)

        if not candidates:
            return CompletionResult()
        return CompletionResult(start, _unique(candidates))
