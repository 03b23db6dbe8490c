"""
The fieldlog Logger.

A Logger owns a FieldSet, a formatter selection, a minimum level and a
sink. It wraps a private stdlib ``logging.Logger`` that is never registered
with the logging manager, so loggers are independent values rather than
process-wide singletons.
"""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from fieldlog.core.entry import Level
from fieldlog.core.fields import FieldSet
from fieldlog.logging.config import LoggerSettings, apply_config
from fieldlog.logging.formatters import (
    FIELDS_ATTR,
    TIMESTAMP_ATTR,
    EntryFormatter,
    TextFormatter,
)
from fieldlog.logging.handler import Sink, SinkHandler, stderr_sink

_internal_ids = itertools.count(1)


def _as_field_set(fields: Mapping[str, Any] | None) -> FieldSet:
    if fields is None:
        return FieldSet.empty()
    if isinstance(fields, FieldSet):
        return fields
    return FieldSet(fields)


class Logger:
    """
    Structured logger with immutable context fields.

    Example:
        log = Logger(sys.stdout.buffer).put_fields(FieldSet(service="billing"))
        log.info("charge accepted")
        log.infof("charged %d cents", 1250)
    """

    def __init__(
        self,
        sink: Sink | None = None,
        *,
        formatter: EntryFormatter | None = None,
        level: Level | int | str = Level.DEBUG,
        fields: Mapping[str, Any] | None = None,
        clock: Callable[[], int] | None = None,
        name: str = "fieldlog",
    ) -> None:
        """
        Initialize the logger.

        Args:
            sink: Byte destination (defaults to standard error)
            formatter: Entry formatter (defaults to TextFormatter)
            level: Minimum level to emit (defaults to DEBUG, i.e. everything)
            fields: Initial context fields
            clock: Wall clock returning nanoseconds since the epoch
            name: Name given to the internal stdlib logger
        """
        self._sink = sink if sink is not None else stderr_sink()
        self._fields = _as_field_set(fields)
        self._clock = clock or time.time_ns

        # Unmanaged logger: never cached by logging.getLogger
        self._internal = logging.Logger(f"{name}.{next(_internal_ids)}")
        self._internal.propagate = False
        self._internal.setLevel(Level.parse(level))
        self._handler = SinkHandler(self._sink, formatter or TextFormatter())
        self._internal.addHandler(self._handler)
        self._name = name

    @property
    def name(self) -> str:
        """Get the logger name."""
        return self._name

    @property
    def fields(self) -> FieldSet:
        """The FieldSet attached to every entry."""
        return self._fields

    @property
    def formatter(self) -> EntryFormatter:
        """The active formatter."""
        return self._handler.formatter  # type: ignore[return-value]

    @property
    def level(self) -> Level:
        """The minimum level that is emitted."""
        return Level(self._internal.level)

    @property
    def sink(self) -> Sink:
        """The byte destination entries are written to."""
        return self._sink

    def _log(self, level: Level, msg: str, args: tuple[Any, ...]) -> None:
        # setLevel does not reset isEnabledFor's cache on unmanaged loggers
        if level < self._internal.level:
            return
        record = self._internal.makeRecord(
            self._internal.name,
            level,
            "(fieldlog)",
            0,
            msg,
            args,
            None,
            extra={FIELDS_ATTR: self._fields, TIMESTAMP_ATTR: self._clock()},
        )
        self._internal.handle(record)

    def debug(self, *args: Any) -> None:
        """Log the arguments, joined by spaces, at DEBUG."""
        self._log(Level.DEBUG, _join(args), ())

    def debugf(self, fmt: str, *args: Any) -> None:
        """Log a %-style formatted message at DEBUG."""
        self._log(Level.DEBUG, fmt, args)

    def info(self, *args: Any) -> None:
        """Log the arguments, joined by spaces, at INFO."""
        self._log(Level.INFO, _join(args), ())

    def infof(self, fmt: str, *args: Any) -> None:
        """Log a %-style formatted message at INFO."""
        self._log(Level.INFO, fmt, args)

    def warning(self, *args: Any) -> None:
        """Log the arguments, joined by spaces, at WARNING."""
        self._log(Level.WARNING, _join(args), ())

    def warningf(self, fmt: str, *args: Any) -> None:
        """Log a %-style formatted message at WARNING."""
        self._log(Level.WARNING, fmt, args)

    def error(self, *args: Any) -> None:
        """Log the arguments, joined by spaces, at ERROR."""
        self._log(Level.ERROR, _join(args), ())

    def errorf(self, fmt: str, *args: Any) -> None:
        """Log a %-style formatted message at ERROR."""
        self._log(Level.ERROR, fmt, args)

    def is_enabled_for(self, level: Level | int | str) -> bool:
        """Check if the logger emits entries at the given level."""
        return Level.parse(level) >= self._internal.level

    def put_fields(self, fields: Mapping[str, Any]) -> Logger:
        """
        Replace the logger's fields.

        The new set replaces the old one wholesale; it is not merged. The
        previous FieldSet is left untouched for anyone holding it.

        Returns:
            This logger, for chaining
        """
        self._fields = _as_field_set(fields)
        return self

    def with_fields(self, fields: Mapping[str, Any] | None = None, **kwargs: Any) -> Logger:
        """
        Return a copy whose fields extend this logger's fields.

        Added fields win on collision. This logger is not modified.
        """
        extra = FieldSet(fields, **kwargs)
        return self.copy().put_fields(self._fields.union(extra))

    def set_config(self, options: Mapping[Any, Any] | LoggerSettings) -> Logger:
        """
        Apply configuration options.

        Args:
            options: Mapping of ConfigKey to value, or a LoggerSettings

        Returns:
            This logger, for chaining

        Raises:
            ConfigurationError: On an unknown key or invalid value
        """
        if isinstance(options, LoggerSettings):
            options = options.to_options()
        apply_config(self, options)
        return self

    def copy(self) -> Logger:
        """
        Return an independent logger with the same configuration.

        The copy writes to the same sink with the same formatter choice and
        level, and starts with equal fields, but has its own internal logger
        and handler and its own formatter instance. Reconfiguring either one
        does not affect the other.
        """
        return Logger(
            self._sink,
            formatter=self.formatter.clone(),
            level=self.level,
            fields=self._fields,
            clock=self._clock,
            name=self._name,
        )

    def _set_formatter(self, formatter: EntryFormatter) -> None:
        self._handler.setFormatter(formatter)

    def _set_level(self, level: Level) -> None:
        self._internal.setLevel(level)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self._name} level={self.level.display_name} "
            f"formatter={type(self.formatter).__name__} fields={len(self._fields)}>"
        )


def _join(args: tuple[Any, ...]) -> str:
    return " ".join(str(arg) for arg in args)


def new_logger(settings: LoggerSettings | None = None, sink: Sink | None = None) -> Logger:
    """
    Create a logger from settings.

    Args:
        settings: Logger settings (defaults to text output at DEBUG)
        sink: Byte destination (defaults to standard error)

    Returns:
        A configured Logger
    """
    return Logger(sink).set_config(settings or LoggerSettings())
