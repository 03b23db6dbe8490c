"""
Log formatters for fieldlog.

Provides a human-readable text formatter and a JSON formatter. Both render
an Entry to bytes; they also plug into plain stdlib handlers through the
usual ``logging.Formatter.format`` hook.
"""

from __future__ import annotations

import copy
import json
import logging
from datetime import tzinfo
from typing import Any

from fieldlog.core.entry import Entry, Level
from fieldlog.core.errors import EncodingError
from fieldlog.core.fields import FieldSet

# LogRecord attributes set by fieldlog.logging.logger.Logger
FIELDS_ATTR = "_fieldlog_fields"
TIMESTAMP_ATTR = "_fieldlog_timestamp_ns"


def entry_from_record(record: logging.LogRecord) -> Entry:
    """
    Build an Entry from a stdlib log record.

    Records emitted by a fieldlog Logger carry their capture time in
    nanoseconds and the logger's FieldSet. Other records fall back to
    ``record.created`` and an empty FieldSet; their level is mapped to the
    closest fieldlog level at or below ``record.levelno``.
    """
    timestamp_ns = getattr(record, TIMESTAMP_ATTR, None)
    if timestamp_ns is None:
        timestamp_ns = int(record.created * 1_000_000_000)

    fields = getattr(record, FIELDS_ATTR, None)
    if fields is None:
        fields = FieldSet.empty()
    elif not isinstance(fields, FieldSet):
        fields = FieldSet(fields)

    return Entry(
        timestamp_ns=timestamp_ns,
        level=_level_for(record.levelno),
        message=record.getMessage(),
        fields=fields,
    )


def _level_for(levelno: int) -> Level:
    matched = Level.DEBUG
    for level in Level:
        if level <= levelno:
            matched = level
    return matched


class EntryFormatter(logging.Formatter):
    """
    Base class for formatters that render entries to bytes.

    Subclasses implement ``render``. Rendered output always ends in a single
    newline; ``format`` strips it because stdlib stream handlers append
    their own terminator.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        """
        Initialize the formatter.

        Args:
            tz: Zone used for timestamps (defaults to the local zone)
        """
        super().__init__()
        self.tz = tz

    def render(self, entry: Entry) -> bytes:
        """
        Render one entry, including its trailing newline.

        Subclasses must override this method.
        """
        raise NotImplementedError

    def clone(self) -> EntryFormatter:
        """Return an independent formatter with the same settings."""
        return copy.copy(self)

    def format_bytes(self, record: logging.LogRecord) -> bytes:
        """Render a stdlib log record."""
        return self.render(entry_from_record(record))

    def format(self, record: logging.LogRecord) -> str:
        """Render a stdlib log record as text without the trailing newline."""
        return self.format_bytes(record).decode("utf-8").removesuffix("\n")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tz={self.tz!r})"


class TextFormatter(EntryFormatter):
    """
    Human-readable single-line formatter.

    Output layout:
        <timestamp> [<key>=<value> ...] <LEVEL> [<message> ]

    The field block is only written when the entry has fields, and the
    message (with its trailing space) only when it is not empty.
    """

    def render(self, entry: Entry) -> bytes:
        """Render the entry as one line of text."""
        parts = [entry.timestamp(self.tz), " "]

        if entry.fields.count() != 0:
            parts.append(format_fields(entry.fields))
            parts.append(" ")

        parts.append(entry.level.display_name)
        parts.append(" ")

        if entry.message:
            parts.append(entry.message)
            parts.append(" ")

        # TODO: append the call site once entries carry caller information
        parts.append("\n")
        return "".join(parts).encode("utf-8", errors="backslashreplace")


def format_fields(fields: FieldSet) -> str:
    """Render fields as space separated ``key=value`` pairs."""
    return " ".join(f"{key}={value}" for key, value in fields.items())


class JSONFormatter(EntryFormatter):
    """
    JSON-structured formatter for log collectors.

    Outputs one compact JSON object per line with sorted keys:
    - fields: Context fields (only when there are any)
    - level: Upper-cased level name
    - message: Log message
    - timestamp: RFC3339 timestamp with nanosecond precision

    Field values keep their native JSON types. A value that cannot be
    encoded raises EncodingError and nothing is produced for the entry.
    """

    def render(self, entry: Entry) -> bytes:
        """Render the entry as a JSON line."""
        log_dict: dict[str, Any] = {
            "timestamp": entry.timestamp(self.tz),
            "message": entry.message,
            "level": entry.level.display_name,
        }
        if entry.fields.count() != 0:
            log_dict["fields"] = dict(entry.fields.items())

        try:
            line = json.dumps(
                log_dict,
                ensure_ascii=False,
                allow_nan=False,
                sort_keys=True,
                separators=(",", ":"),
            )
            return (line + "\n").encode("utf-8")
        except (TypeError, ValueError, RecursionError) as exc:
            raise EncodingError(str(exc), fields=list(entry.fields)) from exc
