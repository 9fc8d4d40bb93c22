"""
almanac - Interval remapping through a chain of named tables.

Seed ranges travel from a start stage ("seed") through piecewise-offset
remap tables until no further table exists; the answer is the lowest value
that reaches the terminal stage.

Layers:
  interval  - half-open range algebra (containment, intersection, subtraction)
  table     - RemapTable / RemapEntry
  graph     - stage graph and chain resolution
  pipeline  - the stage-by-stage worklist engine
  parser    - almanac text → Almanac
"""

__version__ = "0.1.0"

from almanac.interval import Interval, merge_intervals
from almanac.table import RemapEntry, RemapTable
from almanac.graph import StageGraph, ChainError
from almanac.pipeline import (
    Almanac,
    PipelineResult,
    StageRecord,
    StageStats,
    remap_stage,
    DEFAULT_START,
)
from almanac.parser import (
    ParseError,
    ParseErrorKind,
    SeedMode,
    parse_almanac,
    load_almanac,
)

__all__ = [
    "Interval",
    "merge_intervals",
    "RemapEntry",
    "RemapTable",
    "StageGraph",
    "ChainError",
    "Almanac",
    "PipelineResult",
    "StageRecord",
    "StageStats",
    "remap_stage",
    "DEFAULT_START",
    "ParseError",
    "ParseErrorKind",
    "SeedMode",
    "parse_almanac",
    "load_almanac",
]
