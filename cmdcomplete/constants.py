"""Shared constants for cmdcomplete."""

import os
from pathlib import Path

__all__ = [
    "COMMAND_SEPARATORS",
    "CONFIG_ENV_VAR",
    "CONFIG_FILE",
    "DEBUG_ENV_VAR",
    "DEFAULT_STRATEGY",
    "DOUBLE_QUOTE",
    "ESCAPE",
    "SEGMENT_SEPARATORS",
    "SPACE",
    "SUPPORTED_STRATEGIES",
]

# Config file path - use XDG_CONFIG_HOME with fallback to ~/.config
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
CONFIG_FILE = _xdg_config_home / "cmdcomplete" / "config.toml"
CONFIG_ENV_VAR = "CMDCOMPLETE_CONFIG"
DEBUG_ENV_VAR = "CMDCOMPLETE_DEBUG"

# Autocompleter strategies, by name
SUPPORTED_STRATEGIES = ("word", "prefix")
DEFAULT_STRATEGY = "word"

# Command line characters
SPACE = " "
ESCAPE = "\\"
DOUBLE_QUOTE = '"'

# Characters ending a token, and the ones ending a whole command
COMMAND_SEPARATORS = frozenset({" ", "|", "&"})
SEGMENT_SEPARATORS = frozenset({"|", "&"})
