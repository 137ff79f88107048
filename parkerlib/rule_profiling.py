"""Per-rule match counts and second-stage timing."""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from itertools import zip_longest


@dataclass(frozen=True)
class RuleProfileEntry:
    """Profile data for a single rule; durations are in seconds."""

    rule_id: int
    raw_match_count: int
    stage2_duration: float


def _accumulate(target: list, source: list, zero) -> None:
    target[:] = [a + b for a, b in zip_longest(target, source, fillvalue=zero)]


@dataclass
class RuleProfile:
    """Raw match counts and second-stage durations, indexed by rule id."""

    raw_match_counts: list[int] = field(default_factory=list)
    stage2_durations: list[float] = field(default_factory=list)

    def update(self, other: RuleProfile) -> None:
        """Combine another profile into this one."""
        _accumulate(self.raw_match_counts, other.raw_match_counts, 0)
        _accumulate(self.stage2_durations, other.stage2_durations, 0.0)

    def _resize_to_fit(self, rule_id: int) -> None:
        if rule_id < 0:
            raise ValueError(f"invalid rule id {rule_id}")
        cap = rule_id + 1
        if cap > len(self.raw_match_counts):
            self.raw_match_counts.extend([0] * (cap - len(self.raw_match_counts)))
        if cap > len(self.stage2_durations):
            self.stage2_durations.extend([0.0] * (cap - len(self.stage2_durations)))

    def increment_match_count(self, rule_id: int, count: int) -> None:
        """Add ``count`` raw matches for the given rule."""
        self._resize_to_fit(rule_id)
        self.raw_match_counts[rule_id] += count

    def increment_stage2_duration(self, rule_id: int, duration: float) -> None:
        """Add ``duration`` seconds of second-stage time for the given rule."""
        self._resize_to_fit(rule_id)
        self.stage2_durations[rule_id] += duration

    def get_entries(self) -> list[RuleProfileEntry]:
        """Return one entry per profiled rule."""
        return [
            RuleProfileEntry(rule_id, count, duration)
            for rule_id, (count, duration) in enumerate(
                zip(self.raw_match_counts, self.stage2_durations)
            )
        ]

    @contextmanager
    def time_stage2(self, rule_id: int) -> Iterator[None]:
        """Time the enclosed block and add it to the rule's second-stage duration."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.increment_stage2_duration(rule_id, time.perf_counter() - start)