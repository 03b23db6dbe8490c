"""
Log entries and severity levels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from enum import IntEnum

from fieldlog.core.errors import ConfigurationError
from fieldlog.core.fields import FieldSet

_NANOS_PER_SECOND = 1_000_000_000


class Level(IntEnum):
    """Entry severity, numerically aligned with the stdlib logging levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    @property
    def display_name(self) -> str:
        """Upper-cased name used in rendered output."""
        return self.name.upper()

    @classmethod
    def parse(cls, value: Level | int | str) -> Level:
        """
        Resolve a level from a Level, a stdlib level number or a name.

        Raises:
            ConfigurationError: If the value names no known level
        """
        if isinstance(value, cls):
            return value
        try:
            if isinstance(value, str):
                return cls[value.strip().upper()]
            return cls(value)
        except (KeyError, ValueError):
            raise ConfigurationError(
                "level", value, reason=f"unknown log level: {value!r}"
            ) from None


@dataclass(frozen=True)
class Entry:
    """
    One resolved log event, ready to be rendered.

    Entries are built per logging call and handed to exactly one formatter.
    """

    timestamp_ns: int
    level: Level
    message: str
    fields: FieldSet = field(default_factory=FieldSet.empty)

    def timestamp(self, tz: tzinfo | None = None) -> str:
        """The capture time as an RFC3339 string with nanosecond precision."""
        return format_timestamp(self.timestamp_ns, tz)


def format_timestamp(timestamp_ns: int, tz: tzinfo | None = None) -> str:
    """
    Render a nanosecond epoch timestamp as RFC3339.

    The fractional second keeps up to nine digits with trailing zeros
    removed, and is left out entirely when it is zero. A zero UTC offset is
    written as ``Z``.

    Args:
        timestamp_ns: Nanoseconds since the Unix epoch
        tz: Zone to render in (defaults to the local zone)

    Returns:
        e.g. ``2024-03-01T12:30:05.0423Z`` or ``2024-03-01T13:30:05+01:00``
    """
    seconds, nanos = divmod(timestamp_ns, _NANOS_PER_SECOND)
    dt = datetime.fromtimestamp(seconds, timezone.utc).astimezone(tz)

    text = (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
        f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )
    if nanos:
        text += "." + f"{nanos:09d}".rstrip("0")

    offset = dt.utcoffset()
    total = int(offset.total_seconds()) if offset is not None else 0
    if total == 0:
        return text + "Z"
    sign = "+" if total > 0 else "-"
    hours, rest = divmod(abs(total), 3600)
    return f"{text}{sign}{hours:02d}:{rest // 60:02d}"
