"""
Handler that writes rendered entries to a byte sink.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol

from fieldlog.logging.formatters import EntryFormatter


class Sink(Protocol):
    """Anything that accepts bytes in order."""

    def write(self, data: bytes, /) -> Any: ...


class _TextSink:
    """Adapts a text stream without a binary buffer to the Sink protocol."""

    def __init__(self, stream: Any) -> None:
        self.stream = stream

    def write(self, data: bytes) -> None:
        self.stream.write(data.decode("utf-8"))

    def flush(self) -> None:
        self.stream.flush()


def stderr_sink() -> Sink:
    """The binary side of the process' standard error stream."""
    buffer = getattr(sys.stderr, "buffer", None)
    if buffer is not None:
        return buffer
    return _TextSink(sys.stderr)


class SinkHandler(logging.Handler):
    """
    Logging handler that renders each record to bytes and writes it once.

    The whole entry is rendered in memory before the write, so concurrent
    callers can only interleave whole lines. Errors raised by the formatter
    or the sink propagate to the logging call instead of being reported
    through ``handleError``.
    """

    def __init__(self, sink: Sink, formatter: EntryFormatter) -> None:
        super().__init__()
        self.sink = sink
        self.setFormatter(formatter)

    def emit(self, record: logging.LogRecord) -> None:
        """Render the record and write it to the sink."""
        formatter = self.formatter
        if isinstance(formatter, EntryFormatter):
            data = formatter.format_bytes(record)
        else:
            data = (self.format(record) + "\n").encode("utf-8")

        self.sink.write(data)
        flush = getattr(self.sink, "flush", None)
        if flush is not None:
            flush()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} sink={self.sink!r} formatter={self.formatter!r}>"
