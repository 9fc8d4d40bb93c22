#!/usr/bin/env python3
"""
almanac - push seed ranges through a chain of remap tables

Command-line interface.

Usage:
    almanac solve <file>        Print the lowest value reached at the terminal stage
    almanac trace <file>        Show every stage transition
    almanac stages <file>       Show the stage chain and unused tables
    almanac locate <file> <n>   Follow a single value through the chain
"""

from __future__ import annotations

import argparse
import sys
import textwrap
from typing import Optional

from almanac.graph import ChainError
from almanac.interval import Interval, merge_intervals
from almanac.logging_utils import configure_logging, resolve_level
from almanac.parser import ParseError, SeedMode, load_almanac
from almanac.pipeline import DEFAULT_START


# ============================================================================
# Formatting helpers
# ============================================================================

class C:
    """ANSI colors."""
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"
    RESET = "\033[0m"

    @staticmethod
    def off():
        C.BOLD = C.DIM = C.RED = C.GREEN = C.YELLOW = C.CYAN = C.RESET = ""


def header(text: str) -> str:
    return f"\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}\n{C.BOLD}  {text}{C.RESET}\n{C.BOLD}{C.CYAN}{'─' * 60}{C.RESET}"


def ok(text: str) -> str:
    return f"  {C.GREEN}✓{C.RESET} {text}"


def warn(text: str) -> str:
    return f"  {C.YELLOW}⚠{C.RESET} {text}"


def fail(text: str) -> str:
    return f"  {C.RED}✗{C.RESET} {text}"


def dim(text: str) -> str:
    return f"{C.DIM}{text}{C.RESET}"


def fmt_intervals(intervals: list[Interval], limit: int = 8) -> str:
    shown = ", ".join(f"[{iv.start}:{iv.end})" for iv in sorted(intervals)[:limit])
    if len(intervals) > limit:
        shown += f", ...and {len(intervals) - limit} more"
    return shown or "(none)"


def seed_mode(args) -> SeedMode:
    return SeedMode.POINTS if getattr(args, "points", False) else SeedMode.RANGES


# ============================================================================
# Commands
# ============================================================================

def cmd_solve(args) -> int:
    """Print the lowest reachable value."""
    almanac = load_almanac(args.file, seed_mode(args))
    result = almanac.run(args.start)

    if args.quiet:
        print("" if result.minimum is None else result.minimum)
        return 0

    print(header(f"SOLVE: {args.file}"))
    print(f"  {dim('Chain: ' + ' → '.join(result.chain))}")
    if result.minimum is None:
        print(warn("No values reached the terminal stage"))
    else:
        print(ok(f"min: {C.BOLD}{result.minimum}{C.RESET}"))
    return 0


def cmd_trace(args) -> int:
    """Show each stage transition."""
    almanac = load_almanac(args.file, seed_mode(args))
    result = almanac.run(args.start)

    print(header(f"TRACE: {args.file}"))
    print(f"\n  {C.BOLD}{result.start}{C.RESET}  {fmt_intervals(result.seeds)}")

    for i, stage in enumerate(result.stages):
        print(f"\n  [{i + 1}] {C.BOLD}{stage.source} → {stage.destination}{C.RESET}")
        print(f"      {dim(f'mapped={stage.mapped} passed={stage.passed} splits={stage.splits}')}")
        print(f"      {fmt_intervals(stage.outputs)}")

    merged = merge_intervals(result.final)
    print(f"\n  Final: {len(result.final)} interval(s), {len(merged)} merged, "
          f"{result.total_length} values")
    if result.minimum is not None:
        print(ok(f"min: {C.BOLD}{result.minimum}{C.RESET}"))
    return 0


def cmd_stages(args) -> int:
    """Show the resolved stage chain."""
    almanac = load_almanac(args.file)
    graph = almanac.graph
    chain = graph.resolve_chain(args.start)

    print(header(f"STAGES: {args.file}"))
    route = [args.start] + [t.destination for t in chain]
    print(f"\n  {C.BOLD}Route:{C.RESET} {f' {C.CYAN}→{C.RESET} '.join(route)}")
    print(f"  Hops: {len(chain)}")
    print(f"  Terminal: {graph.terminal(args.start)}")

    for table in chain:
        print(f"    {table.name:30s} {dim(f'{len(table)} entries')}")

    unused = graph.unreachable(args.start)
    if unused:
        print(f"\n  {C.BOLD}Unreachable:{C.RESET}")
        for table in unused:
            print(warn(table.name))

    if args.verbose_graph:
        print(f"\n{dim(graph.summary())}")
    return 0


def cmd_locate(args) -> int:
    """Follow one value through every stage."""
    almanac = load_almanac(args.file)
    path = almanac.locate(args.value, args.start)

    print(header(f"LOCATE: {args.value} in {args.file}"))
    for stage, value in path:
        print(f"    {stage:20s} {C.CYAN}{value}{C.RESET}")
    return 0


# ============================================================================
# Entry point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="almanac",
        description="Push seed ranges through a chain of remap tables.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
        examples:
          almanac solve input.txt
          almanac solve input.txt --points -q
          almanac trace input.txt --start soil
          almanac stages input.txt
          almanac locate input.txt 79
        """),
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")

    sub = parser.add_subparsers(dest="command", help="Command to run")

    p = sub.add_parser("solve", help="Print the lowest reachable value")
    p.add_argument("file", help="Almanac input file")
    p.add_argument("--start", default=DEFAULT_START, help=f"Start stage (default: {DEFAULT_START})")
    p.add_argument("--points", action="store_true", help="Read seeds as single values, not ranges")
    p.add_argument("-q", "--quiet", action="store_true", help="Print only the number")

    p = sub.add_parser("trace", help="Show every stage transition")
    p.add_argument("file", help="Almanac input file")
    p.add_argument("--start", default=DEFAULT_START, help=f"Start stage (default: {DEFAULT_START})")
    p.add_argument("--points", action="store_true", help="Read seeds as single values, not ranges")

    p = sub.add_parser("stages", help="Show the stage chain")
    p.add_argument("file", help="Almanac input file")
    p.add_argument("--start", default=DEFAULT_START, help=f"Start stage (default: {DEFAULT_START})")
    p.add_argument("--graph", dest="verbose_graph", action="store_true", help="Also print every stage edge")

    p = sub.add_parser("locate", help="Follow one value through the chain")
    p.add_argument("file", help="Almanac input file")
    p.add_argument("value", type=int, help="Value at the start stage")
    p.add_argument("--start", default=DEFAULT_START, help=f"Start stage (default: {DEFAULT_START})")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        C.off()

    configure_logging(resolve_level(args.verbose))

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "solve": cmd_solve,
        "trace": cmd_trace,
        "stages": cmd_stages,
        "locate": cmd_locate,
    }

    handler = commands[args.command]
    try:
        return handler(args)
    except FileNotFoundError as e:
        print(fail(f"File not found: {e.filename}"), file=sys.stderr)
        return 1
    except OSError as e:
        print(fail(f"Cannot read {e.filename}: {e.strerror}"), file=sys.stderr)
        return 1
    except ParseError as e:
        print(fail(f"Parse error ({e.kind.value}): {e}"), file=sys.stderr)
        return 2
    except ChainError as e:
        print(fail(f"Chain error: {e}"), file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
