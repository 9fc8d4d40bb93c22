"""
Almanac Input Parser

Turns almanac text into an Almanac (seed intervals + remap tables).

Input format:
    seeds: 79 14 55 13

    seed-to-soil map:
    50 98 2
    52 50 48

    soil-to-fertilizer map:
    ...

Blocks are separated by blank lines. The first block lists the seeds; every
later block declares one table followed by `destination source length`
lines.

Any problem raises ParseError carrying the error kind plus the 1-based line
and 0-based column where it was found. Nothing is partially returned.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Union

from almanac.interval import Interval
from almanac.pipeline import Almanac
from almanac.table import RemapEntry, RemapTable


class ParseErrorKind(Enum):
    MALFORMED_NUMBER = "malformed number"
    MISSING_FIELD = "missing field"
    MALFORMED_HEADER = "malformed header"
    UNEXPECTED_TOKEN = "unexpected token"
    ENCODING = "encoding"


class ParseError(Exception):
    def __init__(self, message: str, kind: ParseErrorKind, line: int, col: int):
        super().__init__(f"Line {line}, Col {col}: {message}")
        self.message = message
        self.kind = kind
        self.line = line
        self.col = col


class SeedMode(Enum):
    """How the numbers on the seeds line are read."""
    RANGES = "ranges"   # pairs of (start, length)
    POINTS = "points"   # each number is a single value


SEEDS_PREFIX = "seeds:"
HEADER_RE = re.compile(r"^(?P<source>[A-Za-z0-9_]+)-to-(?P<destination>[A-Za-z0-9_]+) map:$")
NUMBER_RE = re.compile(r"^[+-]?\d+$")
WORD_RE = re.compile(r"\S+")


# ============================================================================
# Tokens
# ============================================================================

def _words(text: str, line_num: int, offset: int = 0) -> list[tuple[str, int, int]]:
    """Split a line into (word, line, col) triples."""
    return [(m.group(), line_num, m.start() + offset) for m in WORD_RE.finditer(text)]


def _to_int(word: str, line: int, col: int) -> int:
    if not NUMBER_RE.match(word):
        raise ParseError(
            f"Expected an integer, found {word!r}",
            ParseErrorKind.MALFORMED_NUMBER, line, col,
        )
    return int(word)


def _blocks(text: str) -> list[list[tuple[int, str]]]:
    """Group non-blank lines into blank-line separated blocks of (line_num, text)."""
    blocks: list[list[tuple[int, str]]] = []
    current: list[tuple[int, str]] = []
    for line_num, line_text in enumerate(text.splitlines(), 1):
        if line_text.strip():
            current.append((line_num, line_text.rstrip()))
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


# ============================================================================
# Pieces
# ============================================================================

def parse_interval(text: str, line: int = 1) -> Interval:
    """Parse `start length` into an Interval."""
    words = _words(text, line)
    if not words:
        raise ParseError("No start", ParseErrorKind.MISSING_FIELD, line, 0)
    if len(words) < 2:
        _, _, col = words[0]
        raise ParseError("No range", ParseErrorKind.MISSING_FIELD, line, col + len(words[0][0]))
    if len(words) > 2:
        word, _, col = words[2]
        raise ParseError(f"Unexpected {word!r}", ParseErrorKind.UNEXPECTED_TOKEN, line, col)
    start = _to_int(*words[0])
    length = _to_int(*words[1])
    return Interval(start, length)


def parse_seeds(
    block: list[tuple[int, str]],
    mode: SeedMode = SeedMode.RANGES,
) -> list[Interval]:
    """Parse the seeds block into intervals."""
    first_line, first_text = block[0]
    stripped = first_text.lstrip()
    if not stripped.startswith(SEEDS_PREFIX):
        raise ParseError(
            f"Expected {SEEDS_PREFIX!r} at start of input",
            ParseErrorKind.MALFORMED_HEADER, first_line, len(first_text) - len(stripped),
        )

    prefix_end = len(first_text) - len(stripped) + len(SEEDS_PREFIX)
    words = _words(first_text[prefix_end:], first_line, prefix_end)
    for line_num, line_text in block[1:]:
        words.extend(_words(line_text, line_num))

    numbers = [_to_int(*w) for w in words]

    if mode == SeedMode.POINTS:
        return [Interval(n, 1) for n in numbers]

    if len(numbers) % 2:
        word, line, col = words[-1]
        raise ParseError(
            f"Seed start {word} has no length",
            ParseErrorKind.MISSING_FIELD, line, col + len(word),
        )
    return [Interval(numbers[i], numbers[i + 1]) for i in range(0, len(numbers), 2)]


def parse_table(block: list[tuple[int, str]]) -> RemapTable:
    """Parse one `<source>-to-<destination> map:` block."""
    header_line, header_text = block[0]
    match = HEADER_RE.match(header_text.strip())
    if not match:
        raise ParseError(
            f"Expected '<source>-to-<destination> map:', found {header_text.strip()!r}",
            ParseErrorKind.MALFORMED_HEADER, header_line, 0,
        )

    table = RemapTable(match.group("source"), match.group("destination"))
    fields = ("destination start", "source start", "length")

    for line_num, line_text in block[1:]:
        words = _words(line_text, line_num)
        if len(words) < len(fields):
            missing = fields[len(words)]
            raise ParseError(
                f"No {missing}",
                ParseErrorKind.MISSING_FIELD, line_num, len(line_text),
            )
        if len(words) > len(fields):
            word, _, col = words[len(fields)]
            raise ParseError(f"Unexpected {word!r}", ParseErrorKind.UNEXPECTED_TOKEN, line_num, col)

        destination, source, length = (_to_int(*w) for w in words)
        table.entries.append(RemapEntry.from_triple(destination, source, length))

    return table


# ============================================================================
# Public API
# ============================================================================

def parse_almanac(text: str, seed_mode: SeedMode = SeedMode.RANGES) -> Almanac:
    """Parse almanac text into an Almanac ready to run."""
    blocks = _blocks(text)
    if not blocks:
        raise ParseError("Empty input", ParseErrorKind.MISSING_FIELD, 1, 0)

    almanac = Almanac(seeds=parse_seeds(blocks[0], seed_mode))
    for block in blocks[1:]:
        almanac.register(parse_table(block))
    return almanac


def load_almanac(
    source: Union[str, Path],
    seed_mode: SeedMode = SeedMode.RANGES,
) -> Almanac:
    """Read and parse an almanac file."""
    data = Path(source).read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        line_start = data.rfind(b"\n", 0, e.start) + 1
        raise ParseError(
            f"Invalid UTF-8 byte {data[e.start]:#04x}",
            ParseErrorKind.ENCODING,
            data.count(b"\n", 0, e.start) + 1,
            e.start - line_start,
        ) from e
    return parse_almanac(text, seed_mode)
