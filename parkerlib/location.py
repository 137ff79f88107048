"""Byte-offset and line/column locations within scanned input."""

from __future__ import annotations

from dataclasses import dataclass

_CR = 0x0D
_LF = 0x0A


@dataclass(frozen=True, order=True)
class OffsetPoint:
    """A point defined by a byte offset."""

    offset: int


@dataclass(frozen=True)
class OffsetSpan:
    """A half-open byte interval ``[start, end)``."""

    start: int
    end: int

    @classmethod
    def from_offsets(cls, start: OffsetPoint, end: OffsetPoint) -> OffsetSpan:
        """Create a span from two offset points."""
        return cls(start.offset, end.offset)

    @classmethod
    def from_range(cls, span_range: range) -> OffsetSpan:
        """Create a span from a contiguous ``range``."""
        if span_range.step != 1:
            raise ValueError("only ranges with a step of 1 describe a span")
        return cls(span_range.start, span_range.stop)

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    def is_empty(self) -> bool:
        """Return whether the span covers no bytes."""
        return self.start >= self.end

    def fully_contains(self, other: OffsetSpan) -> bool:
        """Return whether this span entirely contains ``other``."""
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class SourcePoint:
    """A point given by line (from 1) and column (from 0)."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """A closed interval between two source points."""

    start: SourcePoint
    end: SourcePoint

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


class LocationMapping:
    """A translation table from byte offsets to source points."""

    def __init__(self, data: bytes) -> None:
        points: list[SourcePoint] = []
        line = 1
        column = 0
        for byte in data:
            if byte == _CR:
                column = 0
            elif byte == _LF:
                line += 1
                column = 0
            else:
                column += 1
            points.append(SourcePoint(line, column))
        self._points = points

    def _lookup(self, index: int) -> SourcePoint:
        if index < 0:
            raise IndexError(f"offset {index} is out of range")
        try:
            return self._points[index]
        except IndexError:
            raise IndexError(f"offset {index} is out of range") from None

    def get_source_point(self, point: OffsetPoint) -> SourcePoint:
        """Return the source point for a byte offset; raise IndexError if invalid."""
        return self._lookup(point.offset)

    def get_source_span(self, span: OffsetSpan) -> SourceSpan:
        """Return the source span for a byte span; raise IndexError if invalid."""
        start = self._lookup(span.start)
        end = self._lookup(max(span.end - 1, 0))
        return SourceSpan(start, end)


@dataclass(frozen=True)
class Location:
    """A span in both byte-offset and source-point form."""

    offset_span: OffsetSpan
    source_span: SourceSpan