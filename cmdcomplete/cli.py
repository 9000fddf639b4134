"""The `cmdcomplete` command line tool."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import questionary

from .ansi import BOLD, CYAN, DIM, YELLOW, colorize, should_colorize
from .autocomplete import get_autocompleter
from .config import Configuration
from .config_loader import ConfigLoader
from .constants import DEFAULT_STRATEGY
from .grammar import GRAMMAR_SCHEMA, build_completer, build_roots, load_grammar, validate_grammar
from .logging_setup import get_logger, init_logger
from .matchers import AnyLevelMatcher, MultiPartMatcher, check_acyclic, describe, walk
from .models import ConfigError, ExitCode, MatcherTreeError
from .prompt import MatcherPromptCompleter

if TYPE_CHECKING:
    import logging

    from .completer import CommandLineCompleter
    from .matchers import CompletionMatcher

__all__ = ["Args", "main", "parse_args", "run"]

EXIT_WORDS = frozenset({"exit", "quit"})

# `tree` labels
COMMAND_STYLE = (CYAN, BOLD)
WILDCARD_STYLE = (YELLOW,)
MULTI_PART_STYLE = (DIM,)


@dataclass
class Args:
    """Parsed command line arguments."""

    command: str = ""
    params: list[str] = field(default_factory=list)
    config: str = ""
    strategy: str = ""
    debug: bool = False
    help: bool = False


def parse_args(argv: list[str]) -> Args:
    """Parse command line arguments.

    Args:
        argv: Command line arguments (without program name)
    """
    args = Args()
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--config" and i + 1 < len(argv):
            args.config = argv[i + 1]
            i += 2
            continue
        if arg == "--strategy" and i + 1 < len(argv):
            args.strategy = argv[i + 1]
            i += 2
            continue
        if arg == "--debug":
            args.debug = True
        elif arg in {"--help", "-h"}:
            args.help = True
        elif not args.command:
            args.command = arg
        else:
            args.params.append(arg)
        i += 1
    return args


def print_help() -> None:
    """Print minimal help message."""
    print("Usage: cmdcomplete <command> [OPTIONS]")
    print()
    print("Commands:")
    print("  complete LINE          Print the completions of LINE (trailing spaces matter)")
    print("  words TEXT OPTION...   Complete TEXT against the given options")
    print("  tree                   Show the commands of the grammar")
    print("  validate               Check the grammar file")
    print("  shell                  Interactive prompt using the grammar")
    print()
    print("Options:")
    print("  --config PATH          Grammar file or directory")
    print("  --strategy NAME        Command names completion: word or prefix")
    print("  --debug                Verbose logging")
    print("  --help                 Show this message")


def _complete(args: Args, log: logging.Logger) -> ExitCode:
    completer = build_completer(load_grammar(args.config, log), args.strategy)
    result = completer.complete(" ".join(args.params))
    for candidate in result.candidates:
        print(candidate)
    return ExitCode.SUCCESS if result else ExitCode.NO_COMPLETION


def _words(args: Args, log: logging.Logger) -> ExitCode:
    if not args.params:
        log.error("words: TEXT is missing")
        return ExitCode.USAGE_ERROR
    text, *options = args.params
    completions = get_autocompleter(args.strategy or DEFAULT_STRATEGY).completions_for(text, options)
    for completion in completions:
        print(completion)
    return ExitCode.SUCCESS if completions else ExitCode.NO_COMPLETION


def _tree_style(depth: int, matcher: CompletionMatcher) -> tuple[str, ...]:
    if depth == 0:
        return COMMAND_STYLE
    if isinstance(matcher, AnyLevelMatcher):
        return WILDCARD_STYLE
    if isinstance(matcher, MultiPartMatcher):
        return MULTI_PART_STYLE
    return ()


def _tree(args: Args, log: logging.Logger) -> ExitCode:
    use_colors = should_colorize(sys.stdout)
    for root in build_roots(load_grammar(args.config, log)).values():
        for depth, matcher in walk(root):
            label = describe(matcher)
            if use_colors:
                label = colorize(label, *_tree_style(depth, matcher))
            print("  " * depth + label)
    return ExitCode.SUCCESS


def _validate(args: Args, log: logging.Logger) -> ExitCode:
    raw_config = ConfigLoader(log).load(args.config)
    errors, warnings = validate_grammar(raw_config, log)
    for error in errors:
        log.error(error)
    if errors:
        print(f"Grammar KO: {len(errors)} error(s), {len(warnings)} warning(s)")
        return ExitCode.CONFIG_ERROR

    config = Configuration(raw_config, logger=log, schema=GRAMMAR_SCHEMA)
    for root in build_roots(config).values():
        check_acyclic(root)
    commands = config.section("commands")
    print(f"Grammar OK: {len(commands)} command(s), {len(warnings)} warning(s)")
    return ExitCode.SUCCESS


def _shell_loop(completer: CommandLineCompleter) -> None:
    prompt_completer = MatcherPromptCompleter(completer)
    while True:
        line = questionary.autocomplete("›", choices=completer.command_names, completer=prompt_completer).ask()
        if line is None or line.strip() in EXIT_WORDS:
            return
        print(line)
        for candidate in completer.complete(line).candidates:
            print(f"  {candidate}")


def _shell(args: Args, log: logging.Logger) -> ExitCode:
    completer = build_completer(load_grammar(args.config, log), args.strategy)
    if not completer.command_names:
        log.error("The grammar defines no command")
        return ExitCode.CONFIG_ERROR
    _shell_loop(completer)
    return ExitCode.SUCCESS


COMMANDS = {
    "complete": _complete,
    "words": _words,
    "tree": _tree,
    "validate": _validate,
    "shell": _shell,
}


def run(argv: list[str]) -> ExitCode:
    """Run the CLI.

    Args:
        argv: Command line arguments (without program name)

    Returns:
        The exit code
    """
    args = parse_args(argv)
    if args.help:
        print_help()
        return ExitCode.SUCCESS

    init_logger(debug=args.debug)
    log = get_logger("cli")

    handler = COMMANDS.get(args.command)
    if handler is None:
        if args.command:
            log.error("Unknown command: %s", args.command)
        print_help()
        return ExitCode.USAGE_ERROR

    try:
        return handler(args, log)
    except ConfigError:
        return ExitCode.CONFIG_ERROR
    except MatcherTreeError as e:
        log.error("Invalid grammar: %s", e)  # noqa: TRY400
        return ExitCode.CONFIG_ERROR
    except ValueError as e:
        log.error("%s", e)  # noqa: TRY400
        return ExitCode.USAGE_ERROR


def main() -> None:
    """Entry point for the cmdcomplete command."""
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
