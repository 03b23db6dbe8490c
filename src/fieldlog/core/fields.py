"""
Immutable context fields attached to a logger.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any


class FieldSet(Mapping[str, Any]):
    """
    Immutable mapping of field name to value.

    Every operation that changes the contents returns a new FieldSet; the
    receiver is never modified, so a FieldSet can be shared freely between
    loggers and threads. Equality ignores insertion order.

    Example:
        base = FieldSet(service="billing")
        scoped = base.with_("request_id", "r-1")
        assert "request_id" not in base
    """

    __slots__ = ("_data",)

    def __init__(self, fields: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        data: dict[str, Any] = dict(fields) if fields else {}
        data.update(kwargs)
        self._data = data

    @classmethod
    def empty(cls) -> FieldSet:
        """Return a FieldSet with no entries."""
        return _EMPTY

    @classmethod
    def _wrap(cls, data: dict[str, Any]) -> FieldSet:
        instance = cls.__new__(cls)
        instance._data = data
        return instance

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_data"):
            raise AttributeError("FieldSet is immutable")
        object.__setattr__(self, name, value)

    def count(self) -> int:
        """Number of fields in the set."""
        return len(self._data)

    def with_(self, key: str, value: Any) -> FieldSet:
        """Return a new set with ``key`` bound to ``value``."""
        data = self._data.copy()
        data[key] = value
        return self._wrap(data)

    def union(self, other: Mapping[str, Any]) -> FieldSet:
        """Return a new set holding both sets of pairs; ``other`` wins on collision."""
        if not other:
            return self
        if not self._data and isinstance(other, FieldSet):
            return other
        data = self._data.copy()
        data.update(other)
        return self._wrap(data)

    def without(self, key: str) -> FieldSet:
        """Return a new set without ``key``."""
        if key not in self._data:
            return self
        data = self._data.copy()
        del data[key]
        return self._wrap(data)

    def equals(self, other: Mapping[str, Any]) -> bool:
        """Check whether both sets hold the same pairs, in any order."""
        return self == other

    def __or__(self, other: Mapping[str, Any]) -> FieldSet:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.union(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldSet):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __repr__(self) -> str:
        pairs = ", ".join(f"{k}={v!r}" for k, v in self._data.items())
        return f"FieldSet({pairs})"


_EMPTY = FieldSet()
