"""Completion matcher trees.

A grammar is described as a tree of matchers, one matcher per position of a
command line (command, sub-command, arguments...).

This package provides:
- models: The matcher variants (NodeNameMatcher, AnyLevelMatcher, MatcherCollection, MultiPartMatcher)
- factories: Helpers to declare trees
- tree: Walking, cycle detection and rendering of trees
"""

from __future__ import annotations

from .factories import alternatives, any_level, dynamic_alternatives, dynamic_name_matcher, multi_part_matcher, name_matcher
from .models import AnyLevelMatcher, CompletionMatcher, MatcherCollection, MultiPartMatcher, NodeNameMatcher
from .tree import check_acyclic, describe, walk

__all__ = [
    "AnyLevelMatcher",
    "CompletionMatcher",
    "MatcherCollection",
    "MultiPartMatcher",
    "NodeNameMatcher",
    "alternatives",
    "any_level",
    "check_acyclic",
    "describe",
    "dynamic_alternatives",
    "dynamic_name_matcher",
    "multi_part_matcher",
    "name_matcher",
    "walk",
]
