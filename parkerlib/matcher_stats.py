"""Counters accumulated while scanning blobs."""

from __future__ import annotations

from dataclasses import dataclass, field

from parkerlib.rule_profiling import RuleProfile


@dataclass
class MatcherStats:
    """Counts of blobs and bytes seen and scanned."""

    blobs_seen: int = 0
    blobs_scanned: int = 0
    bytes_seen: int = 0
    bytes_scanned: int = 0
    rule_stats: RuleProfile = field(default_factory=RuleProfile)

    def update(self, other: MatcherStats) -> None:
        """Add the counts of ``other`` into this one."""
        self.blobs_seen += other.blobs_seen
        self.blobs_scanned += other.blobs_scanned
        self.bytes_seen += other.bytes_seen
        self.bytes_scanned += other.bytes_scanned
        self.rule_stats.update(other.rule_stats)