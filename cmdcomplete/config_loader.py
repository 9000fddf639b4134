"""Grammar file loading utilities.

Handles loading, parsing and merging TOML grammar files.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import CONFIG_ENV_VAR, CONFIG_FILE
from .models import ConfigError
from .utils import merge

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigLoader"]


class ConfigLoader:
    """Handles loading and merging grammar files.

    Supports:
    - a single TOML file
    - a directory, all its .toml files being merged in name order
    - `include` directives in the [cmdcomplete] section, relative to the including file
    """

    def __init__(self, log: logging.Logger) -> None:
        """Initialize the config loader.

        Args:
            log: Logger instance for status and error messages
        """
        self.log = log
        self._loaded: set[Path] = set()

    @staticmethod
    def resolve_path(config_filename: str | Path = "") -> Path:
        """Return the grammar file to use.

        The given name wins, then the CMDCOMPLETE_CONFIG environment variable,
        then the default location.
        """
        name = str(config_filename) or os.environ.get(CONFIG_ENV_VAR, "")
        if not name:
            return CONFIG_FILE
        return Path(os.path.expandvars(name)).expanduser()

    def load(self, config_filename: str | Path = "") -> dict[str, Any]:
        """Load the grammar from a file or directory.

        Raises:
            ConfigError: If the file is not found or has syntax errors
        """
        self._loaded.clear()
        return self._open_config(self.resolve_path(config_filename))

    def _open_config(self, fname: Path) -> dict[str, Any]:
        fname = fname.resolve()
        if fname in self._loaded:
            self.log.warning("%s is included more than once, skipping it", fname)
            return {}
        self._loaded.add(fname)

        config = self._load_config_directory(fname) if fname.is_dir() else self._load_config_file(fname)

        base = fname if fname.is_dir() else fname.parent
        for extra_config in list(config.get("cmdcomplete", {}).get("include", [])):
            extra_path = Path(os.path.expandvars(extra_config)).expanduser()
            merge(config, self._open_config(base / extra_path))

        return config

    def _load_config_directory(self, directory: Path) -> dict[str, Any]:
        """Load and merge all .toml files from a directory."""
        config: dict[str, Any] = {}
        for toml_file in sorted(f.name for f in directory.iterdir()):
            if not toml_file.endswith(".toml"):
                continue
            merge(config, self._load_config_file(directory / toml_file))
        return config

    def _load_config_file(self, fname: Path) -> dict[str, Any]:
        """Load a single grammar file.

        Raises:
            ConfigError: If file not found or has syntax errors
        """
        if not fname.exists():
            self.log.critical("Grammar file not found! Please create %s", fname)
            raise ConfigError(str(fname))

        self.log.info("Loading %s", fname)
        with fname.open("rb") as f:
            try:
                return tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                self.log.critical("Problem reading %s: %s", fname, e)
                raise ConfigError(str(fname)) from e
