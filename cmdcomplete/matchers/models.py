"""Matcher variants.

Every matcher answers four questions about the command line being typed:

- completions_for(argument): which tokens can complete this (partial) token?
- partially_matches(command): is this node a plausible continuation of the
  remaining, not yet consumed, command line?
- argument_fully_matched(argument): does this already typed token select this
  node, allowing to look at its children?
- children(): the matchers for the next token.

Matchers are immutable. Children are given at construction time, either as a
tuple or as a callable evaluated each time `children()` is called (for
grammars depending on runtime state, e.g. the currently registered commands).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol, TypeAlias, runtime_checkable

from ..models import MatcherTreeError

__all__ = [
    "AnyLevelMatcher",
    "ChildrenSource",
    "CompletionMatcher",
    "MatcherCollection",
    "MultiPartMatcher",
    "NodeNameMatcher",
]


@runtime_checkable
class CompletionMatcher(Protocol):
    """Protocol implemented by every matcher."""

    def completions_for(self, argument: str) -> list[str]:
        """Return all possible completions for a partially entered argument."""
        ...

    def partially_matches(self, command: str) -> bool:
        """Return True if this matcher can match the beginning of the given command."""
        ...

    def argument_fully_matched(self, argument: str) -> bool:
        """Return True if a possible completion matches the given argument exactly."""
        ...

    def children(self) -> tuple[CompletionMatcher, ...]:
        """Return the matchers for the next argument."""
        ...


ChildrenSource: TypeAlias = tuple[CompletionMatcher, ...] | Callable[[], Iterable[CompletionMatcher]]


def _freeze(owner: object, source: ChildrenSource | Iterable[CompletionMatcher]) -> None:
    """Store a tuple copy of non-callable children on a frozen dataclass."""
    if not callable(source):
        object.__setattr__(owner, "child_source", tuple(source))


def _resolve(owner: object, source: ChildrenSource) -> tuple[CompletionMatcher, ...]:
    if not callable(source):
        return source
    children = tuple(source())
    if any(child is owner for child in children):
        msg = f"{owner!r} lists itself as a child"
        raise MatcherTreeError(msg)
    return children


@dataclass(frozen=True)
class NodeNameMatcher:
    """Match a single literal token, e.g. a sub-command name."""

    name: str
    child_source: ChildrenSource = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            msg = "Node name must be non-empty"
            raise MatcherTreeError(msg)
        _freeze(self, self.child_source)

    def completions_for(self, argument: str) -> list[str]:
        return [self.name] if self.name.startswith(argument) else []

    def partially_matches(self, command: str) -> bool:
        # Only match once the name is followed by a separator:
        # before that, the name itself is still being typed.
        return command.startswith(self.name + " ")

    def argument_fully_matched(self, argument: str) -> bool:
        return argument == self.name

    def children(self) -> tuple[CompletionMatcher, ...]:
        return _resolve(self, self.child_source)


@dataclass(frozen=True)
class AnyLevelMatcher:
    """Wildcard offering the wrapped matcher's completions at any depth.

    Its only child is itself, so once entered it keeps being offered for
    every following argument.
    """

    wrapped: CompletionMatcher

    def completions_for(self, argument: str) -> list[str]:
        return self.wrapped.completions_for(argument)

    def partially_matches(self, command: str) -> bool:  # noqa: ARG002
        return True

    def argument_fully_matched(self, argument: str) -> bool:  # noqa: ARG002
        return True

    def children(self) -> tuple[CompletionMatcher, ...]:
        return (self,)


@dataclass(frozen=True)
class MatcherCollection:
    """Handle several alternative matchers as a single one.

    Every member able to complete an argument contributes completions, and the
    children of the collection are the children of all its members.
    """

    member_source: ChildrenSource = ()

    def __post_init__(self) -> None:
        if not callable(self.member_source):
            object.__setattr__(self, "member_source", tuple(self.member_source))

    def members(self) -> tuple[CompletionMatcher, ...]:
        """Return the alternative matchers."""
        return _resolve(self, self.member_source)

    def __iter__(self) -> Iterator[CompletionMatcher]:
        return iter(self.members())

    def completions_for(self, argument: str) -> list[str]:
        return [completion for member in self.members() for completion in member.completions_for(argument)]

    def partially_matches(self, command: str) -> bool:
        return any(member.partially_matches(command) for member in self.members())

    def argument_fully_matched(self, argument: str) -> bool:
        return argument in self.completions_for(argument)

    def children(self) -> tuple[CompletionMatcher, ...]:
        return tuple(child for member in self.members() for child in member.children())


@dataclass(frozen=True)
class MultiPartMatcher:
    """Match a token made of several parts joined by a separator, e.g. "red+bold".

    Each part is completed by its own (childless) matcher. The children of the
    multi-part matcher come after the whole token.

    A complete token still offers itself and its longer siblings: "red+b" gives
    ["red+bold", "red+b"]. It selects the children only when it has exactly one
    part per part matcher, so "red+bold+x" is never fully matched.
    """

    separator: str
    parts: tuple[CompletionMatcher, ...]
    child_source: ChildrenSource = field(default=(), compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.separator or not self.separator.strip():
            msg = "Separator must be non-empty"
            raise MatcherTreeError(msg)
        object.__setattr__(self, "parts", tuple(self.parts))
        if len(self.parts) < 2:  # noqa: PLR2004
            msg = f"There must be at least 2 parts, found only {len(self.parts)}"
            raise MatcherTreeError(msg)
        if any(part.children() for part in self.parts):
            msg = "Multi-part sub matchers must not have any children, add children to the multi-part matcher itself instead"
            raise MatcherTreeError(msg)
        _freeze(self, self.child_source)

    def _split(self, argument: str) -> list[str]:
        parts = argument.split(self.separator)
        while len(parts) > 1 and not parts[-1]:
            parts.pop()
        if argument.endswith(self.separator):
            # a trailing separator asks for the next part
            parts.append("")
        return parts

    def _prefix(self, matched: list[str]) -> str:
        return self.separator.join(matched) + self.separator if matched else ""

    def completions_for(self, argument: str) -> list[str]:
        parts = self._split(argument)
        if len(parts) > len(self.parts):
            return []

        matched: list[str] = []
        for part, matcher in zip(parts, self.parts):
            if not matcher.argument_fully_matched(part):
                if len(matched) < len(parts) - 1:
                    # an earlier part is wrong
                    return []
                return [self._prefix(matched) + completion for completion in matcher.completions_for(part)]
            matched.append(part)

        if len(matched) < len(self.parts):
            # every typed part is complete, offer the next one
            return [self._prefix(matched) + completion for completion in self.parts[len(matched)].completions_for("")]

        last = len(matched) - 1
        return [self._prefix(matched[:last]) + completion for completion in self.parts[last].completions_for(matched[last])]

    def partially_matches(self, command: str) -> bool:  # noqa: ARG002
        return False

    def argument_fully_matched(self, argument: str) -> bool:
        parts = self._split(argument)
        if len(parts) != len(self.parts):
            return False
        return all(matcher.argument_fully_matched(part) for part, matcher in zip(parts, self.parts))

    def children(self) -> tuple[CompletionMatcher, ...]:
        return _resolve(self, self.child_source)
