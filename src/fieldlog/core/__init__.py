"""Core value types: fields, entries, levels and errors."""

from fieldlog.core.entry import Entry, Level, format_timestamp
from fieldlog.core.errors import ConfigurationError, EncodingError, FieldLogError
from fieldlog.core.fields import FieldSet

__all__ = [
    "ConfigurationError",
    "EncodingError",
    "Entry",
    "FieldLogError",
    "FieldSet",
    "Level",
    "format_timestamp",
]
