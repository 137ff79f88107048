"""Statuses assigned to matches."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum


class Status(str, Enum):
    """A status assigned to a match."""

    ACCEPT = "accept"
    REJECT = "reject"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_sql(cls, value: str | bytes) -> Status:
        """Decode a status stored as text in the database."""
        if isinstance(value, (bytes, bytearray, memoryview)):
            value = bytes(value).decode("utf-8")
        if not isinstance(value, str):
            raise TypeError(f"expected text status, got {type(value).__name__}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"invalid status: {value!r}") from None


@dataclass(frozen=True)
class Statuses:
    """A collection of statuses."""

    statuses: tuple[Status, ...] = ()

    def __init__(self, statuses: Iterable[Status | str] = ()) -> None:
        object.__setattr__(self, "statuses", tuple(Status(s) for s in statuses))

    def __iter__(self) -> Iterator[Status]:
        return iter(self.statuses)

    def __len__(self) -> int:
        return len(self.statuses)

    def to_json(self) -> str:
        """Serialize as a compact JSON array of status names."""
        return json.dumps([s.value for s in self.statuses], separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str | bytes) -> Statuses:
        """Parse a JSON array of status names."""
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("statuses must be a JSON array")
        return cls(data)