"""Tests for the stage graph and chain resolution."""

import logging

import pytest

from almanac.graph import ChainError, StageGraph
from almanac.table import RemapTable


def make_graph(*pairs):
    graph = StageGraph()
    for src, dst in pairs:
        graph.register_table(RemapTable(src, dst))
    return graph


class TestChain:
    def test_resolve_in_order(self):
        graph = make_graph(("soil", "fertilizer"), ("seed", "soil"), ("fertilizer", "water"))
        chain = graph.resolve_chain("seed")
        assert [t.name for t in chain] == [
            "seed-to-soil", "soil-to-fertilizer", "fertilizer-to-water",
        ]
        assert graph.terminal("seed") == "water"

    def test_unknown_start_is_terminal(self):
        graph = make_graph(("seed", "soil"))
        assert graph.resolve_chain("location") == []
        assert graph.terminal("location") == "location"

    def test_start_mid_chain(self):
        graph = make_graph(("seed", "soil"), ("soil", "fertilizer"))
        assert [t.name for t in graph.resolve_chain("soil")] == ["soil-to-fertilizer"]

    def test_cycle_raises(self):
        graph = make_graph(("seed", "soil"), ("soil", "water"), ("water", "soil"))
        with pytest.raises(ChainError) as exc:
            graph.resolve_chain("seed")
        assert exc.value.path == ["soil", "water", "soil"]

    def test_self_loop_raises(self):
        graph = make_graph(("seed", "seed"))
        with pytest.raises(ChainError):
            graph.resolve_chain("seed")


class TestRegistration:
    def test_first_table_wins(self, caplog):
        graph = StageGraph()
        first = RemapTable("seed", "soil")
        assert graph.register_table(first)
        with caplog.at_level(logging.WARNING, logger="almanac.graph"):
            assert not graph.register_table(RemapTable("seed", "water"))
        assert graph.table_for("seed") is first
        assert "Ignoring table seed-to-water" in caplog.text

    def test_unreachable(self):
        graph = make_graph(("seed", "soil"), ("humidity", "location"))
        assert [t.name for t in graph.unreachable("seed")] == ["humidity-to-location"]
        assert [t.name for t in graph.unreachable("nowhere")] == [
            "seed-to-soil", "humidity-to-location",
        ]

    def test_introspection(self):
        graph = make_graph(("seed", "soil"), ("soil", "fertilizer"))
        assert set(graph.stages) == {"seed", "soil", "fertilizer"}
        assert len(graph.tables) == 2
        assert "3 stages, 2 tables" in graph.summary()
