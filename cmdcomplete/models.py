"""Errors and exit codes."""

from enum import IntEnum

__all__ = ["CmdCompleteError", "ConfigError", "ExitCode", "MatcherTreeError"]


class CmdCompleteError(Exception):
    """Base class for cmdcomplete errors."""


class MatcherTreeError(CmdCompleteError, ValueError):
    """A matcher tree was built in a way that breaks its invariants."""


class ConfigError(CmdCompleteError):
    """Used for grammar file errors which already triggered logging."""


class ExitCode(IntEnum):
    """Exit codes for the cmdcomplete CLI."""

    SUCCESS = 0
    USAGE_ERROR = 1  # Unknown command, invalid arguments
    CONFIG_ERROR = 2  # Missing or invalid grammar file
    NO_COMPLETION = 3  # The line has no completion
