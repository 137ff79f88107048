"""Finding metadata and per-rule finding summaries."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass
from typing import Any

from parkerlib.datastore.status import Statuses
from parkerlib.match_type import Groups


@dataclass(frozen=True)
class FindingMetadata:
    """Metadata for a group of matches with identical rule and match content."""

    finding_id: str
    rule_name: str
    rule_text_id: str
    rule_structural_id: str
    groups: Groups
    num_matches: int
    num_redundant_matches: int
    statuses: Statuses
    comment: str | None = None
    mean_score: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize as a JSON-compatible dictionary."""
        return {
            "finding_id": self.finding_id,
            "rule_name": self.rule_name,
            "rule_text_id": self.rule_text_id,
            "rule_structural_id": self.rule_structural_id,
            "groups": [g.to_json_value() for g in self.groups],
            "num_matches": self.num_matches,
            "num_redundant_matches": self.num_redundant_matches,
            "statuses": [s.value for s in self.statuses],
            "comment": self.comment,
            "mean_score": self.mean_score,
        }


@dataclass(frozen=True)
class FindingSummaryEntry:
    """Finding and match counts for one rule."""

    rule_name: str
    distinct_count: int
    total_count: int
    accept_count: int
    reject_count: int
    mixed_count: int
    unlabeled_count: int


class FindingSummary:
    """A summary of the findings in a datastore, one entry per rule."""

    def __init__(self, entries: Iterable[FindingSummaryEntry] = ()) -> None:
        self.entries: list[FindingSummaryEntry] = list(entries)

    def __iter__(self) -> Iterator[FindingSummaryEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FindingSummary):
            return NotImplemented
        return self.entries == other.entries

    def __repr__(self) -> str:
        return f"FindingSummary({self.entries!r})"

    def to_json(self) -> str:
        """Serialize as a JSON array of entries."""
        return json.dumps([asdict(e) for e in self.entries])