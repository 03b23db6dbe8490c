"""
Shared test fixtures.
"""

import io
from datetime import timezone

import pytest
from hypothesis import HealthCheck, settings

from fieldlog.core.fields import FieldSet
from fieldlog.logging.formatters import JSONFormatter, TextFormatter
from fieldlog.logging.logger import Logger

# Cold-cache Unicode table generation for st.characters() can trip the
# too_slow health check on the first run; it is not a property failure.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")

# 2024-03-01T12:30:05.0423Z
FIXED_NS = 1_709_296_205_042_300_000
FIXED_TIMESTAMP = "2024-03-01T12:30:05.0423Z"


def fixed_clock() -> int:
    return FIXED_NS


class RecordingSink:
    """Sink that keeps every write separately."""

    def __init__(self) -> None:
        self.writes: list[bytes] = []

    def write(self, data: bytes) -> int:
        self.writes.append(data)
        return len(data)

    def lines(self) -> list[str]:
        return [chunk.decode("utf-8") for chunk in self.writes]


# === Fixtures ===


@pytest.fixture
def sink():
    """In-memory byte sink."""
    return io.BytesIO()


@pytest.fixture
def recording_sink():
    """Sink that records individual writes."""
    return RecordingSink()


@pytest.fixture
def test_fields():
    """The three-field set used across logger tests."""
    return FieldSet(
        numberVal=1,
        byteVal=ord("k"),
        stringVal="this is a sentence",
    )


@pytest.fixture
def text_logger(sink):
    """Text logger with a fixed clock rendering in UTC."""
    return Logger(sink, formatter=TextFormatter(tz=timezone.utc), clock=fixed_clock)


@pytest.fixture
def json_logger(sink):
    """JSON logger with a fixed clock rendering in UTC."""
    return Logger(sink, formatter=JSONFormatter(tz=timezone.utc), clock=fixed_clock)


@pytest.fixture
def clock():
    """Clock that always returns FIXED_NS."""
    return fixed_clock


@pytest.fixture
def fixed_timestamp():
    """FIXED_NS rendered in UTC."""
    return FIXED_TIMESTAMP
