"""
Almanac Stage Graph

Nodes are stage names ("seed", "soil", ...), edges are the RemapTables that
carry values from one stage to the next. The chain is functional: each stage
has at most one outgoing table, and a walk from the start stage ends at the
first stage with no outgoing table (the terminal stage).

The chain is resolved once into an ordered list of tables before the
pipeline runs, so stage lookups during a run are a plain list walk.
"""

from __future__ import annotations

import logging
from typing import Optional

import networkx as nx

from almanac.table import RemapTable

logger = logging.getLogger(__name__)


class ChainError(Exception):
    """The stage chain cannot be walked to a terminal stage."""
    def __init__(self, message: str, path: Optional[list[str]] = None):
        super().__init__(message)
        self.path = path or []


class StageGraph:
    """Directed graph of stages connected by remap tables."""

    def __init__(self) -> None:
        self._graph = nx.DiGraph()
        self._tables: dict[str, RemapTable] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_table(self, table: RemapTable) -> bool:
        """Add a table as the outgoing edge of its source stage.

        The first table registered for a stage wins; later ones are
        ignored with a warning. Returns whether the table was kept.
        """
        if table.source in self._tables:
            kept = self._tables[table.source]
            logger.warning(
                "Ignoring table %s: stage '%s' already maps through %s",
                table.name, table.source, kept.name,
            )
            return False

        self._tables[table.source] = table
        self._graph.add_edge(table.source, table.destination, table=table)
        return True

    def table_for(self, stage: str) -> Optional[RemapTable]:
        """The table leaving `stage`, or None if the stage is terminal."""
        return self._tables.get(stage)

    # ------------------------------------------------------------------
    # Chain resolution
    # ------------------------------------------------------------------

    def resolve_chain(self, start: str) -> list[RemapTable]:
        """Ordered tables from `start` to the terminal stage.

        Raises ChainError if the walk revisits a stage.
        """
        chain: list[RemapTable] = []
        visited = [start]
        current = start

        while current in self._tables:
            table = self._tables[current]
            chain.append(table)
            current = table.destination
            if current in visited:
                cycle = visited[visited.index(current):] + [current]
                raise ChainError(
                    f"Stage chain from '{start}' loops: {' → '.join(cycle)}",
                    path=cycle,
                )
            visited.append(current)

        logger.debug("Resolved chain from '%s': %s", start, " → ".join(visited))
        return chain

    def terminal(self, start: str) -> str:
        """The stage where a walk from `start` stops."""
        chain = self.resolve_chain(start)
        return chain[-1].destination if chain else start

    def unreachable(self, start: str) -> list[RemapTable]:
        """Tables that a walk from `start` never uses."""
        if start in self._graph:
            reachable = nx.descendants(self._graph, start) | {start}
        else:
            reachable = {start}
        return [t for name, t in self._tables.items() if name not in reachable]

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def stages(self) -> list[str]:
        return list(self._graph.nodes)

    @property
    def tables(self) -> list[RemapTable]:
        return list(self._tables.values())

    def summary(self) -> str:
        """Human-readable graph summary."""
        lines = [
            f"Stage Graph: {self._graph.number_of_nodes()} stages, "
            f"{self._graph.number_of_edges()} tables",
            "",
        ]
        for src, dst, data in self._graph.edges(data=True):
            lines.append(f"  {src} → {dst}  ({len(data['table'])} entries)")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"<StageGraph: {self._graph.number_of_nodes()} stages, "
            f"{self._graph.number_of_edges()} tables>"
        )
