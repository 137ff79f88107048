"""Matches of rules within blobs, and their capture groups."""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from parkerlib.location import Location, OffsetSpan
from parkerlib.snippet import Snippet


@dataclass(frozen=True)
class Group:
    """The bytes of one capture group."""

    data: bytes

    def to_json_value(self) -> str:
        """Return the group encoded as base64."""
        return base64.b64encode(self.data).decode("ascii")

    @classmethod
    def from_json_value(cls, value: str) -> Group:
        """Decode a group from its base64 form."""
        if not isinstance(value, str):
            raise ValueError("group must be a base64 string")
        try:
            return cls(base64.b64decode(value, validate=True))
        except binascii.Error as exc:
            raise ValueError(f"invalid base64 group: {value!r}") from exc


@dataclass(frozen=True)
class Groups:
    """The capture groups of a match."""

    groups: tuple[Group, ...] = ()

    def __init__(self, groups: Iterable[Group | bytes] = ()) -> None:
        object.__setattr__(
            self,
            "groups",
            tuple(g if isinstance(g, Group) else Group(bytes(g)) for g in groups),
        )

    def __iter__(self) -> Iterator[Group]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def to_json(self) -> str:
        """Serialize as a compact JSON array of base64 strings."""
        return json.dumps([g.to_json_value() for g in self.groups], separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str | bytes) -> Groups:
        """Parse a JSON array of base64 strings."""
        data = json.loads(text)
        if not isinstance(data, list):
            raise ValueError("groups must be a JSON array")
        return cls(Group.from_json_value(v) for v in data)


def _blob_hex(blob_id: str | bytes) -> str:
    return blob_id.hex() if isinstance(blob_id, (bytes, bytearray)) else str(blob_id)


def compute_structural_id(rule_structural_id: str, blob_id: str | bytes, span: OffsetSpan) -> str:
    """Return a content-based identifier for a match of a rule at a span of a blob."""
    text = f"{rule_structural_id}\0{_blob_hex(blob_id)}\0{span.start}\0{span.end}"
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class Match:
    """A match of a rule within a blob."""

    blob_id: str
    location: Location
    groups: Groups
    snippet: Snippet
    structural_id: str
    rule_structural_id: str
    rule_text_id: str
    rule_name: str

    def finding_id(self) -> str:
        """Return the content-based identifier of the finding this match belongs to."""
        h = hashlib.sha1()
        h.update(f"{self.rule_structural_id}\0".encode("utf-8"))
        h.update(self.groups.to_json().encode("utf-8"))
        return h.hexdigest()