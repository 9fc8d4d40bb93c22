"""
Almanac Interval Algebra

An Interval is a half-open integer range [start, start + length). Every
remapping decision in the pipeline is made with the predicates below.

Key operations:
- has_intersection: directional overlap test (see note below)
- is_contained_in: full containment under half-open semantics
- subtract: the part(s) of an interval lying outside another
- split: an interval cut at another's boundaries (what the pipeline uses)

Note on direction: has_intersection only asks whether *this* interval's
endpoints land inside the other one. An interval that strictly contains the
other is not reported. The pipeline depends on this exact test at its call
sites; use overlaps() for a symmetric check.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True, order=True)
class Interval:
    """A half-open integer range [start, start + length)."""
    start: int
    length: int

    @classmethod
    def span(cls, start: int, end: int) -> Interval:
        """Build an interval from its start and exclusive end."""
        return cls(start, end - start)

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_empty(self) -> bool:
        return self.length <= 0

    def contains(self, value: int) -> bool:
        return self.start <= value < self.end

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def has_intersection(self, other: Interval) -> bool:
        """True if this interval's start or end falls inside `other`.

        start in [other.start, other.end), end in (other.start, other.end].
        Not symmetric: a.has_intersection(b) can differ from
        b.has_intersection(a).
        """
        start_in_range = other.start <= self.start < other.end
        end_in_range = other.start < self.end <= other.end
        return start_in_range or end_in_range

    def is_contained_in(self, other: Interval) -> bool:
        """True if this interval lies entirely inside `other`."""
        start_contained = other.start <= self.start < other.end
        end_contained = other.start < self.end <= other.end
        return start_contained and end_contained

    def overlaps(self, other: Interval) -> bool:
        """Symmetric overlap test: the ranges share at least one value."""
        return self.start < other.end and other.start < self.end

    # ------------------------------------------------------------------
    # Set operations
    # ------------------------------------------------------------------

    def intersection(self, other: Interval) -> Optional[Interval]:
        """The values common to both intervals, or None."""
        if self.is_empty or other.is_empty or not self.overlaps(other):
            return None
        return Interval.span(max(self.start, other.start), min(self.end, other.end))

    def subtract(self, other: Interval) -> list[Interval]:
        """The portion(s) of this interval lying outside `other`.

        Returns at most two side pieces (left of other.start, right of
        other.end). `other` itself is never part of the result, so
        subtract(other) plus intersection(other) rebuilds this interval.
        Order of the returned pieces is not guaranteed.
        """
        if not self.has_intersection(other) and not other.has_intersection(self):
            return [self]

        pieces = []
        if self.start < other.start:
            pieces.append(Interval.span(self.start, min(self.end, other.start)))
        if self.end > other.end:
            pieces.append(Interval.span(max(self.start, other.end), self.end))
        return [p for p in pieces if not p.is_empty]

    def split(self, other: Interval) -> list[Interval]:
        """Cut this interval at `other`'s boundaries.

        Every returned piece is either fully inside `other` or disjoint
        from it, and together they cover this interval exactly once.
        Pieces come back sorted by start; empty pieces are dropped.
        """
        overlap = self.intersection(other)
        if overlap is None:
            return [] if self.is_empty else [self]
        return sorted(self.subtract(other) + [overlap])

    def shifted(self, offset: int) -> Interval:
        return Interval(self.start + offset, self.length)

    def __repr__(self) -> str:
        return f"<Interval [{self.start}:{self.end}) ({self.length} values)>"


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Coalesce overlapping or touching intervals into a sorted list.

    Used for reporting only; the pipeline itself never merges.
    """
    merged: list[Interval] = []
    for iv in sorted(i for i in intervals if not i.is_empty):
        if merged and iv.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Interval.span(last.start, max(last.end, iv.end))
        else:
            merged.append(iv)
    return merged
