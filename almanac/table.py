"""
Almanac Remap Tables

A RemapTable connects two named stages (e.g. "seed" → "soil"). It is an
ordered list of RemapEntry pairs, each shifting a source sub-range onto a
destination sub-range of the same length. Values not covered by any entry
pass through unchanged.

Lookups scan entries in table order and return the first hit. Entries are
expected to be disjoint on their source side; if they are not, table order
decides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from almanac.interval import Interval


@dataclass(frozen=True)
class RemapEntry:
    """One source → destination pair inside a table."""
    source: Interval
    destination: Interval

    def __post_init__(self) -> None:
        if self.source.length != self.destination.length:
            raise ValueError(
                f"Entry lengths differ: source has {self.source.length}, "
                f"destination has {self.destination.length}"
            )

    @classmethod
    def from_triple(cls, destination_start: int, source_start: int, length: int) -> RemapEntry:
        """Build an entry from an almanac line: `destination source length`."""
        return cls(
            source=Interval(source_start, length),
            destination=Interval(destination_start, length),
        )

    @property
    def offset(self) -> int:
        """How far values move when mapped through this entry."""
        return self.destination.start - self.source.start

    def apply(self, interval: Interval) -> Interval:
        """Shift an interval by this entry's offset (caller checks containment)."""
        return interval.shifted(self.offset)

    def __repr__(self) -> str:
        sign = "+" if self.offset >= 0 else ""
        return (
            f"<Entry [{self.source.start}:{self.source.end}) → "
            f"[{self.destination.start}:{self.destination.end}) ({sign}{self.offset})>"
        )


@dataclass
class RemapTable:
    """A named piecewise-offset function between two stages."""
    source: str
    destination: str
    entries: list[RemapEntry] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"{self.source}-to-{self.destination}"

    def add_entry(self, source: Interval, destination: Interval) -> RemapEntry:
        entry = RemapEntry(source, destination)
        self.entries.append(entry)
        return entry

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def intersects(self, interval: Interval) -> bool:
        """Does `interval` intersect any entry's source range?"""
        return any(interval.has_intersection(e.source) for e in self.entries)

    def find_entry(self, interval: Interval) -> Optional[RemapEntry]:
        """First entry (in table order) whose source `interval` intersects."""
        for entry in self.entries:
            if interval.has_intersection(entry.source):
                return entry
        return None

    def map_value(self, value: int) -> int:
        """Map a single value; uncovered values map to themselves."""
        for entry in self.entries:
            if entry.source.contains(value):
                return value + entry.offset
        return value

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RemapEntry]:
        return iter(self.entries)

    def __repr__(self) -> str:
        return f"<RemapTable {self.name}: {len(self.entries)} entries>"
