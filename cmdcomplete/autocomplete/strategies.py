"""Autocompletion strategies for flat option lists.

Both strategies share the `completions_for(text, options)` contract and can be
swapped at configuration time, see `get_autocompleter`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..constants import DEFAULT_STRATEGY
from .words import break_up_words

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

__all__ = ["STRATEGIES", "Autocompleter", "PrefixAutocompleter", "WordAutocompleter", "get_autocompleter"]


@runtime_checkable
class Autocompleter(Protocol):
    """Given some text and the available options, return the possible completions."""

    def completions_for(self, text: str, options: Sequence[str]) -> list[str]:
        """Return the options completing `text`, in their original order.

        Args:
            text: The text to complete
            options: The available options
        """
        ...


class WordAutocompleter:
    """Use uppercase letters as word boundaries.

    Text like "gA" completes to "getAll" and "giveAccess", but not to "grab":
    every word typed must be the start of the corresponding word of the option.
    """

    name = "word"

    def completions_for(self, text: str, options: Sequence[str]) -> list[str]:
        candidates: list[tuple[str, Iterator[str]]] = [(option, break_up_words(option)) for option in options]

        for word in break_up_words(text):
            survivors = []
            for option, option_words in candidates:
                option_word = next(option_words, None)
                if option_word is not None and option_word.startswith(word):
                    survivors.append((option, option_words))
            if not survivors:
                return []
            candidates = survivors

        return [option for option, _ in candidates]

    def __repr__(self) -> str:
        return "WordAutocompleter()"


class PrefixAutocompleter:
    """Take any option starting with the text as a possible completion."""

    name = "prefix"

    def completions_for(self, text: str, options: Sequence[str]) -> list[str]:
        return [option for option in options if option.startswith(text)]

    def __repr__(self) -> str:
        return "PrefixAutocompleter()"


STRATEGIES: dict[str, type[WordAutocompleter] | type[PrefixAutocompleter]] = {
    WordAutocompleter.name: WordAutocompleter,
    PrefixAutocompleter.name: PrefixAutocompleter,
}


def get_autocompleter(name: str = DEFAULT_STRATEGY) -> Autocompleter:
    """Return the autocompleter registered under `name`.

    Args:
        name: Strategy name ("word" or "prefix")

    Raises:
        ValueError: If no strategy has this name
    """
    try:
        return STRATEGIES[name]()
    except KeyError:
        choices = ", ".join(repr(s) for s in STRATEGIES)
        msg = f"Unknown autocompletion strategy {name!r}, valid options: {choices}"
        raise ValueError(msg) from None
