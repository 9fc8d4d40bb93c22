"""
Almanac Pipeline Engine

Pushes a set of seed intervals through a chain of remap tables and reports
the lowest value that comes out the other end.

Each stage transition (remap_stage) works on a LIFO worklist:
1. Intervals touching no entry pass straight through.
2. An interval fully inside an entry's source is shifted by its offset.
3. Anything else is split at the entry's boundaries and the pieces go back
   on the worklist.

Every pop either retires an interval or replaces it with strictly shorter
pieces, so each stage terminates.

Usage:
    almanac = Almanac(seeds=[Interval(79, 14), Interval(55, 13)])
    almanac.register(seed_to_soil)
    ...
    result = almanac.run()
    print(result.minimum)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from almanac.graph import StageGraph
from almanac.interval import Interval, merge_intervals
from almanac.table import RemapTable

logger = logging.getLogger(__name__)

DEFAULT_START = "seed"


@dataclass
class StageStats:
    """Counters for one stage transition."""
    mapped: int = 0     # intervals shifted through an entry
    passed: int = 0     # intervals carried over unchanged
    splits: int = 0     # intervals cut at an entry boundary


def remap_stage(
    intervals: Iterable[Interval],
    table: RemapTable,
    stats: Optional[StageStats] = None,
) -> list[Interval]:
    """Resolve every interval against one table; return the next stage's set."""
    if stats is None:
        stats = StageStats()

    current = list(intervals)
    with_overlap = [iv for iv in current if table.intersects(iv)]
    without_overlap = [iv for iv in current if not table.intersects(iv)]
    stats.passed += len(without_overlap)

    while with_overlap:
        value = with_overlap.pop()
        entry = table.find_entry(value)

        if entry is None:
            without_overlap.append(value)
            stats.passed += 1
            continue

        if value.is_contained_in(entry.source):
            without_overlap.append(entry.apply(value))
            stats.mapped += 1
        else:
            with_overlap.extend(value.split(entry.source))
            stats.splits += 1

    return without_overlap


@dataclass
class StageRecord:
    """Trace of a single stage transition."""
    source: str
    destination: str
    inputs: list[Interval]
    outputs: list[Interval]
    mapped: int = 0
    passed: int = 0
    splits: int = 0

    def __repr__(self) -> str:
        return (
            f"<Stage {self.source}→{self.destination}: "
            f"{len(self.inputs)} in, {len(self.outputs)} out "
            f"(mapped={self.mapped} passed={self.passed} splits={self.splits})>"
        )


@dataclass
class PipelineResult:
    """The outcome of running seeds through the whole chain."""
    start: str
    seeds: list[Interval]
    stages: list[StageRecord] = field(default_factory=list)
    final: list[Interval] = field(default_factory=list)

    @property
    def chain(self) -> list[str]:
        """Stage names visited, start to terminal."""
        return [self.start] + [s.destination for s in self.stages]

    @property
    def terminal(self) -> str:
        return self.chain[-1]

    @property
    def minimum(self) -> Optional[int]:
        """Lowest start across the final set, or None if it is empty."""
        if not self.final:
            return None
        return min(iv.start for iv in self.final)

    @property
    def total_length(self) -> int:
        return sum(iv.length for iv in self.final)

    def summary(self) -> str:
        lines = [
            f"Almanac run: {' → '.join(self.chain)}",
            f"  Seeds: {len(self.seeds)} interval(s)",
            f"  Stages: {len(self.stages)}",
            f"  Final: {len(self.final)} interval(s), "
            f"{len(merge_intervals(self.final))} after merging",
            f"  Minimum: {self.minimum}",
        ]
        return "\n".join(lines)


class Almanac:
    """Seed intervals plus the graph of tables they travel through."""

    def __init__(self, seeds: Optional[Iterable[Interval]] = None) -> None:
        self.seeds: list[Interval] = list(seeds or [])
        self._graph = StageGraph()

    def register(self, table: RemapTable) -> None:
        """Register a remap table."""
        self._graph.register_table(table)

    @property
    def graph(self) -> StageGraph:
        return self._graph

    @property
    def tables(self) -> list[RemapTable]:
        return self._graph.tables

    @property
    def stages(self) -> list[str]:
        return self._graph.stages

    def run(self, start: str = DEFAULT_START) -> PipelineResult:
        """Push the seeds from `start` to the terminal stage."""
        chain = self._graph.resolve_chain(start)
        result = PipelineResult(start=start, seeds=list(self.seeds))

        current = list(self.seeds)
        for table in chain:
            stats = StageStats()
            outputs = remap_stage(current, table, stats)
            result.stages.append(StageRecord(
                source=table.source,
                destination=table.destination,
                inputs=current,
                outputs=outputs,
                mapped=stats.mapped,
                passed=stats.passed,
                splits=stats.splits,
            ))
            logger.debug(
                "%s: %d → %d intervals (mapped=%d passed=%d splits=%d)",
                table.name, len(current), len(outputs),
                stats.mapped, stats.passed, stats.splits,
            )
            current = outputs

        result.final = current
        logger.info(
            "Reached '%s' after %d stage(s); minimum=%s",
            result.terminal, len(result.stages), result.minimum,
        )
        return result

    def lowest(self, start: str = DEFAULT_START) -> Optional[int]:
        """Shortcut for run(start).minimum."""
        return self.run(start).minimum

    def locate(self, value: int, start: str = DEFAULT_START) -> list[tuple[str, int]]:
        """Follow a single value through the chain.

        Returns (stage, value) pairs from `start` to the terminal stage.
        """
        path = [(start, value)]
        for table in self._graph.resolve_chain(start):
            value = table.map_value(value)
            path.append((table.destination, value))
        return path

    def __repr__(self) -> str:
        return f"<Almanac: {len(self.seeds)} seed range(s), {len(self.tables)} tables>"
