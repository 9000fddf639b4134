"""Grammar sections with schema defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterator

    from .validation import ConfigItems

__all__ = ["Configuration"]


class Configuration(dict):
    """A section of a grammar file.

    Missing keys fall back to the defaults declared in the section's schema.
    """

    def __init__(self, data: dict[str, Any] | None = None, *, logger: logging.Logger, schema: ConfigItems | None = None) -> None:
        super().__init__(data or {})
        self.log = logger
        self.defaults = {field.name: field.default for field in schema or () if field.default is not None}

    def get(self, name: str, default: Any = None) -> Any:  # noqa: ANN401
        if name in self:
            return self[name]
        return self.defaults.get(name, default)

    def get_str(self, name: str, default: str = "") -> str:
        value = self.get(name)
        return default if value is None else str(value)

    def section(self, name: str, schema: ConfigItems | None = None) -> Configuration:
        """Return a sub-section, empty if missing or not a table.

        Args:
            name: The sub-section key
            schema: Schema of the sub-section, for its defaults
        """
        value = self.get(name)
        if not isinstance(value, dict):
            if value is not None:
                self.log.warning("Ignoring %s: expected a section, got %s", name, type(value).__name__)
            value = {}
        return Configuration(value, logger=self.log, schema=schema)

    def iter_subsections(self) -> Iterator[tuple[str, dict[str, Any]]]:
        """Yield the (name, table) pairs, skipping plain values."""
        for name, value in self.items():
            if isinstance(value, dict):
                yield name, value
