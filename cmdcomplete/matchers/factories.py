"""Helpers to declare matcher trees.

Example::

    targets = [name_matcher(target) for target in ("prompt", "text")]
    root = name_matcher(
        "color",
        *[name_matcher(color, *targets) for color in ("blue", "red")],
        any_level(name_matcher("--help")),
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import AnyLevelMatcher, MatcherCollection, MultiPartMatcher, NodeNameMatcher

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from .models import CompletionMatcher

__all__ = [
    "alternatives",
    "any_level",
    "dynamic_alternatives",
    "dynamic_name_matcher",
    "multi_part_matcher",
    "name_matcher",
]


def name_matcher(name: str, *children: CompletionMatcher) -> NodeNameMatcher:
    """Create a matcher for the literal `name`, followed by `children`.

    Raises:
        MatcherTreeError: If the name is blank
    """
    return NodeNameMatcher(name, children)


def dynamic_name_matcher(name: str, children: Callable[[], Iterable[CompletionMatcher]]) -> NodeNameMatcher:
    """Create a matcher for the literal `name`, whose children are computed on demand.

    Args:
        name: The literal token
        children: Called each time the children are needed
    """
    return NodeNameMatcher(name, children)


def any_level(matcher: CompletionMatcher) -> AnyLevelMatcher:
    """Make `matcher` available at its position and at every position after it."""
    return AnyLevelMatcher(matcher)


def alternatives(*matchers: CompletionMatcher) -> MatcherCollection:
    """Use all of the given matchers as a single one."""
    return MatcherCollection(matchers)


def dynamic_alternatives(matchers: Callable[[], Iterable[CompletionMatcher]]) -> MatcherCollection:
    """Use all the matchers returned by `matchers` (called on demand) as a single one."""
    return MatcherCollection(matchers)


def multi_part_matcher(separator: str, parts: Sequence[CompletionMatcher], *children: CompletionMatcher) -> MultiPartMatcher:
    """Create a matcher for tokens made of `parts` joined by `separator`.

    Args:
        separator: Parts separator, e.g. "+"
        parts: Matchers for each part, all childless
        *children: Matchers for the tokens following the multi-part token

    Raises:
        MatcherTreeError: If the separator is blank, there are less than 2 parts or a part has children
    """
    return MultiPartMatcher(separator, tuple(parts), children)
