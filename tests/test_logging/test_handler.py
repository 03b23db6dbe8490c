"""Tests for SinkHandler and the default sink."""

import io
import logging
import sys
from datetime import timezone

import pytest

from fieldlog.logging.formatters import TIMESTAMP_ATTR, TextFormatter
from fieldlog.logging.handler import SinkHandler, stderr_sink


class FlushingSink:
    def __init__(self):
        self.data = b""
        self.flushes = 0

    def write(self, data):
        self.data += data

    def flush(self):
        self.flushes += 1


class BrokenSink:
    def write(self, data):
        raise OSError("disk full")


def make_record(msg="hello", level=logging.INFO):
    record = logging.LogRecord("test", level, __file__, 1, msg, None, None)
    setattr(record, TIMESTAMP_ATTR, 0)
    return record


class TestSinkHandler:
    def test_writes_rendered_bytes(self):
        sink = io.BytesIO()
        handler = SinkHandler(sink, TextFormatter(tz=timezone.utc))

        handler.handle(make_record())

        assert sink.getvalue() == b"1970-01-01T00:00:00Z INFO hello \n"

    def test_flushes_after_write(self):
        sink = FlushingSink()
        handler = SinkHandler(sink, TextFormatter(tz=timezone.utc))

        handler.handle(make_record())
        handler.handle(make_record())

        assert sink.flushes == 2
        assert sink.data.count(b"\n") == 2

    def test_plain_stdlib_formatter(self):
        sink = io.BytesIO()
        handler = SinkHandler(sink, TextFormatter())
        handler.setFormatter(logging.Formatter("%(levelname)s:%(message)s"))

        handler.handle(make_record())

        assert sink.getvalue() == b"INFO:hello\n"

    def test_sink_errors_propagate(self):
        handler = SinkHandler(BrokenSink(), TextFormatter())
        with pytest.raises(OSError, match="disk full"):
            handler.handle(make_record())


class TestStderrSink:
    def test_uses_binary_buffer(self, monkeypatch):
        stream = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        monkeypatch.setattr(sys, "stderr", stream)
        assert stderr_sink() is stream.buffer

    def test_text_stream_fallback(self, monkeypatch):
        stream = io.StringIO()
        monkeypatch.setattr(sys, "stderr", stream)

        sink = stderr_sink()
        sink.write("héllo\n".encode("utf-8"))
        sink.flush()

        assert stream.getvalue() == "héllo\n"
