"""
fieldlog logger, formatters and configuration.

Provides a logger with immutable context fields that renders entries as
text or JSON lines and writes them to a byte sink.
"""

from fieldlog.logging.config import (
    ConfigKey,
    FormatterKind,
    LoggerSettings,
    apply_config,
)
from fieldlog.logging.formatters import (
    EntryFormatter,
    JSONFormatter,
    TextFormatter,
    entry_from_record,
)
from fieldlog.logging.handler import Sink, SinkHandler, stderr_sink
from fieldlog.logging.logger import Logger, new_logger

__all__ = [
    # Logger
    "Logger",
    "new_logger",
    # Configuration
    "ConfigKey",
    "FormatterKind",
    "LoggerSettings",
    "apply_config",
    # Formatters
    "EntryFormatter",
    "JSONFormatter",
    "TextFormatter",
    "entry_from_record",
    # Output
    "Sink",
    "SinkHandler",
    "stderr_sink",
]
