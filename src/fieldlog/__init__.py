"""
fieldlog - structured logging with immutable context fields.

Attach a FieldSet to a Logger, emit leveled entries, and render each one
as a human-readable line or a JSON object.
"""

__version__ = "0.1.0"

from fieldlog.core.entry import Entry, Level
from fieldlog.core.errors import ConfigurationError, EncodingError, FieldLogError
from fieldlog.core.fields import FieldSet
from fieldlog.logging.config import ConfigKey, FormatterKind, LoggerSettings
from fieldlog.logging.formatters import JSONFormatter, TextFormatter
from fieldlog.logging.logger import Logger, new_logger

__all__ = [
    # Version
    "__version__",
    # Values
    "Entry",
    "FieldSet",
    "Level",
    # Logger
    "Logger",
    "new_logger",
    # Configuration
    "ConfigKey",
    "FormatterKind",
    "LoggerSettings",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    # Errors
    "FieldLogError",
    "ConfigurationError",
    "EncodingError",
]
