"""Snippets of matched input with surrounding context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Snippet:
    """The matching bytes with the bytes just before and after it."""

    before: bytes
    matching: bytes
    after: bytes

    def to_dict(self) -> dict[str, str]:
        """Serialize as lossily decoded UTF-8 strings."""
        return {
            "before": self.before.decode("utf-8", errors="replace"),
            "matching": self.matching.decode("utf-8", errors="replace"),
            "after": self.after.decode("utf-8", errors="replace"),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snippet:
        """Build a snippet from its serialized form."""
        return cls(
            before=str(data["before"]).encode("utf-8"),
            matching=str(data["matching"]).encode("utf-8"),
            after=str(data["after"]).encode("utf-8"),
        )