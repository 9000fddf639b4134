"""Declarative command grammars.

Commands are described in a TOML file and turned into matcher trees::

    [cmdcomplete]
    strategy = "word"

    [commands.grab]
    args = ["central", "jcenter"]
    any_level = ["--help"]

    [commands.color.sub.red]
    args = ["prompt", "text", "error"]

    [commands.highlight.multi_part]
    separator = "+"
    parts = [["red", "blue"], ["bold", "b"]]

Each command (and each `sub` entry) is a node accepting:
- sub: sub-commands, each one being a node
- args: literal arguments
- multi_part: a token made of parts (`separator`, `parts`, and `args` following the token)
- any_level: arguments accepted at any depth below the node
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .autocomplete import get_autocompleter
from .completer import CommandLineCompleter
from .config import Configuration
from .config_loader import ConfigLoader
from .constants import DEFAULT_STRATEGY, SUPPORTED_STRATEGIES
from .matchers import alternatives, any_level, multi_part_matcher, name_matcher
from .models import ConfigError
from .validation import ConfigField, ConfigItems, ConfigValidator

if TYPE_CHECKING:
    import logging
    from pathlib import Path

    from .matchers import CompletionMatcher, NodeNameMatcher

__all__ = [
    "GRAMMAR_SCHEMA",
    "NODE_SCHEMA",
    "SETTINGS_SCHEMA",
    "build_completer",
    "build_node",
    "build_roots",
    "load_grammar",
    "validate_grammar",
]

_MULTI_PART_KEYS = ("separator", "parts", "args")
_MIN_PARTS = 2


def _validate_names(value: list) -> list[str]:
    return [f"Expected a non-empty string, got {item!r}" for item in value if not isinstance(item, str) or not item.strip()]


def _validate_keys(value: dict) -> list[str]:
    return [f"Name must be non-empty, got {key!r}" for key in value if not key.strip()]


def _validate_multi_part(value: dict) -> list[str]:
    errors = [f"Unknown option {key!r}" for key in value if key not in _MULTI_PART_KEYS]

    separator = value.get("separator")
    if not isinstance(separator, str) or not separator.strip():
        errors.append("'separator' must be a non-empty string")

    parts = value.get("parts")
    if not isinstance(parts, list) or len(parts) < _MIN_PARTS:
        errors.append(f"'parts' must be a list of at least {_MIN_PARTS} lists of names")
    else:
        for index, part in enumerate(parts, start=1):
            if not isinstance(part, list) or not part:
                errors.append(f"Part #{index} must be a non-empty list of names")
            else:
                errors.extend(f"Part #{index}: {error}" for error in _validate_names(part))

    args = value.get("args", [])
    if isinstance(args, list):
        errors.extend(_validate_names(args))
    else:
        errors.append("'args' must be a list of names")
    return errors


NODE_SCHEMA = ConfigItems(
    ConfigField("sub", dict, validator=_validate_keys, description="Sub-commands, by name"),
    ConfigField("args", list, validator=_validate_names, description="Literal arguments"),
    ConfigField("multi_part", dict, validator=_validate_multi_part, description="Token made of several parts"),
    ConfigField("any_level", list, validator=_validate_names, description="Arguments accepted at any depth"),
)
# sub-commands are nodes too
NODE_SCHEMA[0].children = NODE_SCHEMA

SETTINGS_SCHEMA = ConfigItems(
    ConfigField("strategy", str, default=DEFAULT_STRATEGY, choices=list(SUPPORTED_STRATEGIES), description="Command names completion"),
    ConfigField("include", list, validator=_validate_names, description="Other grammar files"),
)

GRAMMAR_SCHEMA = ConfigItems(
    ConfigField("cmdcomplete", dict, description="Settings"),
    ConfigField("commands", dict, required=True, validator=_validate_keys, children=NODE_SCHEMA, description="Commands, by name"),
)


def validate_grammar(config: dict[str, Any], log: logging.Logger) -> tuple[list[str], list[str]]:
    """Validate a loaded grammar.

    Returns:
        Tuple of (errors, warnings)
    """
    validator = ConfigValidator(config, "config", log)
    errors = validator.validate(GRAMMAR_SCHEMA)
    validator.warn_unknown_keys(GRAMMAR_SCHEMA)

    settings = config.get("cmdcomplete")
    if isinstance(settings, dict):
        settings_validator = ConfigValidator(settings, "cmdcomplete", log)
        errors.extend(settings_validator.validate(SETTINGS_SCHEMA))
        settings_validator.warn_unknown_keys(SETTINGS_SCHEMA)
        validator.warnings.extend(settings_validator.warnings)

    return errors, validator.warnings


def load_grammar(config_filename: str | Path, log: logging.Logger) -> Configuration:
    """Load and validate a grammar file.

    Args:
        config_filename: File or directory, empty for the default location
        log: Logger used to report problems

    Raises:
        ConfigError: If the grammar can't be read or is invalid, the problems being logged
    """
    config = ConfigLoader(log).load(config_filename)
    errors, _ = validate_grammar(config, log)
    for error in errors:
        log.error(error)
    if errors:
        msg = f"{len(errors)} error(s) in the grammar"
        raise ConfigError(msg)
    return Configuration(config, logger=log, schema=GRAMMAR_SCHEMA)


def _build_children(node: dict[str, Any]) -> list[CompletionMatcher]:
    children: list[CompletionMatcher] = [build_node(name, sub) for name, sub in node.get("sub", {}).items()]
    children.extend(name_matcher(arg) for arg in node.get("args", []))

    multi_part = node.get("multi_part")
    if multi_part:
        parts = [alternatives(*(name_matcher(name) for name in part)) for part in multi_part["parts"]]
        following = (name_matcher(arg) for arg in multi_part.get("args", []))
        children.append(multi_part_matcher(multi_part["separator"], parts, *following))

    children.extend(any_level(name_matcher(name)) for name in node.get("any_level", []))
    return children


def build_node(name: str, node: dict[str, Any]) -> NodeNameMatcher:
    """Build the matcher tree of a command described by a grammar node.

    Args:
        name: Command (or sub-command) name
        node: Its description, see the module documentation
    """
    return name_matcher(name, *_build_children(node))


def build_roots(config: Configuration) -> dict[str, CompletionMatcher]:
    """Build the matcher tree of every command of a grammar.

    Returns:
        Command name -> matcher tree
    """
    return {name: build_node(name, node) for name, node in config.section("commands").iter_subsections()}


def build_completer(config: Configuration, strategy: str = "") -> CommandLineCompleter:
    """Build a completer for all the commands of a grammar.

    Args:
        config: The grammar
        strategy: Command names completion strategy, overrides the grammar's setting
    """
    settings = config.section("cmdcomplete", SETTINGS_SCHEMA)
    return CommandLineCompleter(build_roots(config), get_autocompleter(strategy or settings.get_str("strategy")))
