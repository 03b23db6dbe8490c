"""
Logger configuration for fieldlog.

Options are enumerated keys with enumerated values. Every key must be
recognized explicitly; anything else is a ConfigurationError.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from datetime import tzinfo
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from fieldlog.core.entry import Level
from fieldlog.core.errors import ConfigurationError
from fieldlog.logging.formatters import EntryFormatter, JSONFormatter, TextFormatter

if TYPE_CHECKING:
    from fieldlog.logging.logger import Logger

logger = logging.getLogger(__name__)


class ConfigKey(str, Enum):
    """Configuration option keys."""

    FORMATTER = "formatter"
    LEVEL = "level"


class FormatterKind(str, Enum):
    """Output formatter options."""

    TEXT = "text"
    JSON = "json"


def build_formatter(kind: FormatterKind, tz: tzinfo | None = None) -> EntryFormatter:
    """Create the formatter for a formatter kind."""
    if kind == FormatterKind.JSON:
        return JSONFormatter(tz=tz)
    return TextFormatter(tz=tz)


def resolve_option(key: Any, value: Any) -> tuple[ConfigKey, Any]:
    """
    Normalize one option to its enum key and typed value.

    Raises:
        ConfigurationError: If the key is unknown or the value is not valid
            for it
    """
    try:
        config_key = ConfigKey(key.lower() if isinstance(key, str) else key)
    except ValueError:
        raise ConfigurationError(key, value) from None

    if config_key == ConfigKey.FORMATTER:
        try:
            kind = FormatterKind(value.lower() if isinstance(value, str) else value)
        except ValueError:
            raise ConfigurationError(
                key, value, reason=f"unknown formatter: {value!r}"
            ) from None
        return config_key, kind

    # ConfigKey.LEVEL
    return config_key, Level.parse(value)


def apply_config(target: Logger, options: Mapping[Any, Any]) -> None:
    """
    Apply configuration options to a logger.

    All options are validated before any is applied, so a rejected call
    leaves the logger as it was. Options are independent and may be given
    in any order.

    Args:
        target: Logger to reconfigure
        options: Mapping of ConfigKey (or its value) to option value

    Raises:
        ConfigurationError: On an unknown key or invalid value
    """
    resolved = [resolve_option(key, value) for key, value in options.items()]

    for key, value in resolved:
        if key == ConfigKey.FORMATTER:
            target._set_formatter(build_formatter(value, tz=target.formatter.tz))
            logger.debug("Installed %s formatter", value.value)
        elif key == ConfigKey.LEVEL:
            target._set_level(value)
            logger.debug("Set minimum level to %s", value.display_name)


class LoggerSettings(BaseModel):
    """
    Declarative logger settings.

    Example:
        settings = LoggerSettings(formatter="json", level="info")
        log = new_logger(settings)
    """

    formatter: FormatterKind = Field(default=FormatterKind.TEXT)
    level: Level = Field(default=Level.DEBUG)

    model_config = {"frozen": True}

    @field_validator("formatter", mode="before")
    @classmethod
    def _normalize_formatter(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Level:
        try:
            return Level.parse(value)
        except ConfigurationError as exc:
            raise ValueError(exc.message) from None

    def to_options(self) -> dict[ConfigKey, Any]:
        """Convert to an option mapping accepted by ``Logger.set_config``."""
        return {
            ConfigKey.FORMATTER: self.formatter,
            ConfigKey.LEVEL: self.level,
        }

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = "FIELDLOG_",
    ) -> LoggerSettings:
        """
        Read settings from environment variables.

        Recognizes ``<prefix>FORMATTER`` and ``<prefix>LEVEL``; unset or
        empty variables keep their defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        values: dict[str, str] = {}
        for name in ("formatter", "level"):
            raw = environ.get(f"{prefix}{name.upper()}", "").strip()
            if raw:
                values[name] = raw

        try:
            return cls(**values)
        except ValidationError as exc:
            errors = exc.errors()
            field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else "settings"
            raise ConfigurationError(
                f"{prefix}{field.upper()}",
                values.get(field),
                reason=f"invalid value for {prefix}{field.upper()}: {values.get(field)!r}",
            ) from exc
