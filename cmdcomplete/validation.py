"""Schema validation of grammar files.

A schema is a `ConfigItems` list of `ConfigField`. A dict field can declare
`children`: every value of the dict is then a section validated against that
schema, which is how nested command nodes are checked (a node's `sub` field
has the node schema as children).
"""

from __future__ import annotations

import difflib
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

__all__ = ["ConfigField", "ConfigItems", "ConfigValidator", "format_config_error"]

# expected type -> (description, fix suggestion)
_TYPE_HINTS: dict[type, tuple[str, str]] = {
    str: ("a string", 'Use {name} = "value"'),
    list: ("a list", 'Use {name} = ["item1", "item2"]'),
    dict: ("a section", "Use a [section] or an inline table"),
}


@dataclass
class ConfigField:
    """Describes an expected field of a section.

    `validator` returns error messages for a value of the right type.
    `children` is the schema of every value of a dict field.
    """

    name: str
    field_type: type = str
    required: bool = False
    default: Any = None
    description: str = ""
    choices: Sequence[str] = ()
    validator: Callable[[Any], list[str]] | None = None
    children: ConfigItems | None = None


class ConfigItems(list):
    """The fields of a section."""

    def __init__(self, *fields: ConfigField) -> None:
        super().__init__(fields)

    @property
    def names(self) -> list[str]:
        return [field.name for field in self]


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    return matches[0] if matches else None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format an error message, e.g. "[commands.grab] Config error for 'args': ..."."""
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


class ConfigValidator:
    """Validates a section, and its child sections, against a schema.

    Errors are returned by `validate`; warnings (unknown keys) are logged and
    collected in `warnings`, including the ones of the child sections.
    """

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        self.config = config
        self.section = section
        self.log = logger
        self.warnings: list[str] = []

    def validate(self, schema: ConfigItems) -> list[str]:
        """Return the error messages, empty if the section is valid."""
        errors: list[str] = []
        for field_def in schema:
            errors.extend(self._check_field(field_def, self.config.get(field_def.name)))
        return errors

    def _error(self, field: str, message: str, suggestion: str = "") -> str:
        return format_config_error(self.section, field, message, suggestion)

    def _check_field(self, field_def: ConfigField, value: Any) -> list[str]:  # noqa: ANN401
        if value is None:
            return [self._error(field_def.name, "Missing required field")] if field_def.required else []

        if not isinstance(value, field_def.field_type):
            expected, suggestion = _TYPE_HINTS.get(field_def.field_type, (field_def.field_type.__name__, ""))
            message = f"Expected {expected}, got {type(value).__name__}"
            return [self._error(field_def.name, message, suggestion.format(name=field_def.name))]

        errors = []
        if field_def.choices and value not in field_def.choices:
            choices = ", ".join(repr(choice) for choice in field_def.choices)
            errors.append(self._error(field_def.name, f"Invalid value {value!r}", f"Valid options: {choices}"))
        if field_def.validator:
            errors.extend(self._error(field_def.name, message) for message in field_def.validator(value))
        if field_def.children is not None:
            errors.extend(self._check_children(field_def.name, value, field_def.children))
        return errors

    def _check_children(self, name: str, sections: dict, schema: ConfigItems) -> list[str]:
        errors: list[str] = []
        for key, section in sections.items():
            if not isinstance(section, dict):
                errors.append(format_config_error(f"{self.section}.{name}", key, f"Expected a section, got {type(section).__name__}"))
                continue
            child = ConfigValidator(section, f"{self.section}.{name}.{key}", self.log)
            errors.extend(child.validate(schema))
            child.warn_unknown_keys(schema)
            self.warnings.extend(child.warnings)
        return errors

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log a warning for every key missing from the schema, suggesting the closest known key.

        Returns:
            The new warnings
        """
        known_keys = schema.names
        warnings = []
        for key in self.config:
            if key in known_keys:
                continue
            similar = _find_similar_key(key, known_keys)
            if similar:
                msg = f"[{self.section}] Unknown option '{key}' (did you mean '{similar}'?)"
            else:
                msg = f"[{self.section}] Unknown option '{key}' - will be ignored"
            self.log.warning(msg)
            warnings.append(msg)
        self.warnings.extend(warnings)
        return warnings
