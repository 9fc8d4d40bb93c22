"""Tests for remap tables and entries."""

import pytest

from almanac.interval import Interval
from almanac.table import RemapEntry, RemapTable


def make_table():
    table = RemapTable("seed", "soil")
    table.entries.append(RemapEntry.from_triple(50, 98, 2))
    table.entries.append(RemapEntry.from_triple(52, 50, 48))
    return table


class TestRemapEntry:
    def test_from_triple(self):
        entry = RemapEntry.from_triple(50, 98, 2)
        assert entry.source == Interval(98, 2)
        assert entry.destination == Interval(50, 2)
        assert entry.offset == -48

    def test_apply(self):
        entry = RemapEntry.from_triple(52, 50, 48)
        assert entry.apply(Interval(79, 14)) == Interval(81, 14)

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            RemapEntry(Interval(0, 5), Interval(10, 4))


class TestRemapTable:
    def test_name(self):
        assert make_table().name == "seed-to-soil"

    def test_add_entry(self):
        table = RemapTable("a", "b")
        entry = table.add_entry(Interval(12, 3), Interval(100, 3))
        assert len(table) == 1
        assert list(table) == [entry]

    def test_intersects(self):
        table = make_table()
        assert table.intersects(Interval(79, 14))
        assert not table.intersects(Interval(0, 10))

    def test_intersects_is_directional(self):
        table = RemapTable("a", "b")
        table.add_entry(Interval(50, 10), Interval(0, 10))
        # [40, 80) swallows the entry, but neither endpoint lands inside it
        assert not table.intersects(Interval(40, 40))

    def test_find_entry_first_match(self):
        table = RemapTable("a", "b")
        first = table.add_entry(Interval(0, 10), Interval(100, 10))
        table.add_entry(Interval(5, 10), Interval(200, 10))
        assert table.find_entry(Interval(6, 2)) is first

    def test_find_entry_none(self):
        assert make_table().find_entry(Interval(0, 10)) is None

    def test_map_value(self):
        table = make_table()
        assert table.map_value(79) == 81
        assert table.map_value(98) == 50
        assert table.map_value(99) == 51
        assert table.map_value(10) == 10
        assert table.map_value(100) == 100

    def test_empty_table(self):
        table = RemapTable("soil", "fertilizer")
        assert len(table) == 0
        assert not table.intersects(Interval(0, 100))
        assert table.find_entry(Interval(0, 100)) is None
