"""Flat-list autocompletion.

This package provides:
- words: camelCase word splitting
- strategies: the Autocompleter protocol and its word / prefix implementations
"""

from __future__ import annotations

from .strategies import STRATEGIES, Autocompleter, PrefixAutocompleter, WordAutocompleter, get_autocompleter
from .words import break_up_words

__all__ = [
    "STRATEGIES",
    "Autocompleter",
    "PrefixAutocompleter",
    "WordAutocompleter",
    "break_up_words",
    "get_autocompleter",
]
