"""prompt_toolkit integration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from prompt_toolkit.completion import Completer, Completion

if TYPE_CHECKING:
    from collections.abc import Iterable

    from prompt_toolkit.completion import CompleteEvent
    from prompt_toolkit.document import Document

    from .completer import CommandLineCompleter

__all__ = ["MatcherPromptCompleter"]


class MatcherPromptCompleter(Completer):
    """A prompt_toolkit completer backed by a `CommandLineCompleter`."""

    def __init__(self, completer: CommandLineCompleter) -> None:
        self.completer = completer

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:  # noqa: ARG002
        text = document.text_before_cursor
        result = self.completer.complete(text)
        for candidate in result.candidates:
            yield Completion(candidate, start_position=result.start - len(text))
