"""Walking and rendering matcher trees."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import MatcherTreeError
from .models import AnyLevelMatcher, MatcherCollection, MultiPartMatcher, NodeNameMatcher

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .models import CompletionMatcher

__all__ = ["check_acyclic", "describe", "walk"]


def walk(root: CompletionMatcher) -> Iterator[tuple[int, CompletionMatcher]]:
    """Yield every matcher of a tree, depth first, with its depth.

    The self-loop of an AnyLevelMatcher is not followed.

    Raises:
        MatcherTreeError: If a matcher is its own ancestor
    """

    def visit(node: CompletionMatcher, depth: int, ancestors: frozenset[int]) -> Iterator[tuple[int, CompletionMatcher]]:
        yield depth, node
        if isinstance(node, AnyLevelMatcher):
            return
        for child in node.children():
            if id(child) in ancestors:
                msg = f"Cycle found: {describe(child)} is an ancestor of {describe(node)}"
                raise MatcherTreeError(msg)
            yield from visit(child, depth + 1, ancestors | {id(child)})

    yield from visit(root, 0, frozenset({id(root)}))


def check_acyclic(root: CompletionMatcher) -> None:
    """Make sure the tree can be walked completely.

    Raises:
        MatcherTreeError: If a matcher is its own ancestor
    """
    for _ in walk(root):
        pass


def describe(matcher: CompletionMatcher) -> str:
    """Return a short human-readable label for a matcher.

    E.g., "grab", "*--help", "red|blue", "{red|blue}+{bold|b}"
    """
    if isinstance(matcher, NodeNameMatcher):
        return matcher.name
    if isinstance(matcher, AnyLevelMatcher):
        return "*" + describe(matcher.wrapped)
    if isinstance(matcher, MatcherCollection):
        return "|".join(describe(member) for member in matcher.members())
    if isinstance(matcher, MultiPartMatcher):
        return matcher.separator.join("{" + describe(part) + "}" for part in matcher.parts)
    return repr(matcher)
