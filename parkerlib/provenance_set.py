"""Non-empty sets of provenance entries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from parkerlib.provenance import GitRepoProvenance, Provenance


class ProvenanceSet:
    """A non-empty set of provenance entries, without redundant less specific ones."""

    def __init__(self, provenance: Provenance, more_provenance: Iterable[Provenance] = ()) -> None:
        items = [provenance, *more_provenance]
        detailed: set[Path] = {
            p.repo_path
            for p in items
            if isinstance(p, GitRepoProvenance) and p.first_commit is not None
        }
        self._items: list[Provenance] = [
            p
            for p in items
            if not isinstance(p, GitRepoProvenance)
            or p.first_commit is not None
            or p.repo_path not in detailed
        ]

    @classmethod
    def single(cls, provenance: Provenance) -> ProvenanceSet:
        """Create a set holding one entry."""
        return cls(provenance)

    @classmethod
    def try_from_iter(cls, items: Iterable[Provenance]) -> ProvenanceSet | None:
        """Create a set from the given entries, or return None if there are none."""
        iterator = iter(items)
        try:
            first = next(iterator)
        except StopIteration:
            return None
        return cls(first, iterator)

    def first(self) -> Provenance:
        """Return the first entry."""
        return self._items[0]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Provenance]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProvenanceSet):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"ProvenanceSet({self._items!r})"

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize as a flat list of tagged entries."""
        return [p.to_dict() for p in self._items]