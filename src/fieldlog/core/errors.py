"""
Error taxonomy for fieldlog.

All fieldlog errors inherit from FieldLogError and include:
- A unique error code for programmatic handling
- A human-readable message
- Optional details about the offending input
"""

from typing import Any


class FieldLogError(Exception):
    """
    Base class for all fieldlog errors.

    Attributes:
        code: Unique error code for programmatic handling
        message: Human-readable error message
        details: Additional error context
    """

    code: str = "FIELDLOG_ERROR"

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(FieldLogError):
    """
    A logger was configured with an option it does not recognize.

    This signals a mismatch between the caller and the library, not bad
    input data. It is raised at setup time and is not meant to be caught.
    """

    code = "CONFIGURATION_ERROR"

    def __init__(self, key: Any, value: Any = None, reason: str | None = None) -> None:
        message = reason or f"unknown configuration: {key!r}"
        super().__init__(
            message,
            details={"key": str(key), "value": None if value is None else str(value)},
        )
        self.key = key
        self.value = value


class EncodingError(FieldLogError):
    """An entry could not be serialized by a formatter."""

    code = "ENCODING_ERROR"

    def __init__(self, reason: str, fields: list[str] | None = None) -> None:
        super().__init__(
            f"Cannot encode log entry: {reason}",
            details={"fields": fields or []},
        )
