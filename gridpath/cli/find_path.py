#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
find_path.py
------------
Run a single A* query and print the path as JSON.

Examples:
    python -m gridpath.cli.find_path --scenario wall.json
    python -m gridpath.cli.find_path \
        --size 5x5 --obstacles "2,0;2,1;2,2;2,3" \
        --start 0,0 --target 4,4 --connectivity 8

Exit status: 0 path found, 1 no path, 2 invalid input.
Cells are (x, y); --size is WIDTHxHEIGHT.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from gridpath.envs.grid import Cell
from gridpath.envs.scenario import Scenario
from gridpath.errors import GridPathError
from gridpath.planners.a_star import PathFinder

logger = logging.getLogger("gridpath.cli.find_path")

EXIT_FOUND, EXIT_NO_PATH, EXIT_INVALID = 0, 1, 2


def _parse_size(s: str) -> Tuple[int, int]:
    token = s.strip().lower()
    if "x" not in token:
        raise ValueError(f"Bad size '{token}', expected like 20x10")
    w, h = token.split("x")
    return int(w), int(h)


def _parse_cell(s: str) -> Cell:
    parts = s.strip().split(",")
    if len(parts) != 2:
        raise ValueError(f"Bad cell '{s}', expected like 3,4")
    return int(parts[0]), int(parts[1])


def _parse_cells(s: str) -> List[Cell]:
    return [_parse_cell(tok) for tok in s.split(";") if tok.strip()]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Find a shortest grid path with A*.")
    ap.add_argument("--scenario", type=str, default=None,
                    help="JSON scenario file (width, height, obstacles, start, target, allow_diagonals)")
    ap.add_argument("--size", type=str, default=None, help="Grid size WIDTHxHEIGHT (e.g., 5x5)")
    ap.add_argument("--obstacles", type=str, default="", help='Semicolon-separated cells, e.g. "2,0;2,1"')
    ap.add_argument("--start", type=str, default=None, help="Start cell x,y")
    ap.add_argument("--target", type=str, default=None, help="Target cell x,y")
    ap.add_argument("--connectivity", type=int, default=None, choices=[4, 8],
                    help="Movement model; overrides the scenario's allow_diagonals (default 8)")
    ap.add_argument("--strict", action="store_true",
                    help="Treat blocked or out-of-bounds start/target as an error")
    ap.add_argument("--max-expansions", type=int, default=None, help="Node-expansion ceiling")
    ap.add_argument("--log-level", type=str, default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def _scenario_from_args(args: argparse.Namespace) -> Scenario:
    if args.scenario:
        scenario = Scenario.load(args.scenario)
    else:
        if not (args.size and args.start and args.target):
            raise ValueError("--size, --start and --target are required without --scenario")
        width, height = _parse_size(args.size)
        scenario = Scenario(
            width=width, height=height,
            start=_parse_cell(args.start), target=_parse_cell(args.target),
            obstacles=_parse_cells(args.obstacles),
        )
    if args.connectivity is not None:
        scenario.allow_diagonals = args.connectivity == 8
    return scenario


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s - %(name)s - %(levelname)s: %(message)s")

    try:
        scenario = _scenario_from_args(args)
        finder = PathFinder(allow_diagonals=scenario.allow_diagonals, strict=args.strict,
                            max_expansions=args.max_expansions)
        finder.configure(scenario.width, scenario.height, scenario.obstacles)
        path = finder.find_path(scenario.start, scenario.target)
        # An empty path is a success only when start == target is itself a free cell.
        found = bool(path) or (scenario.start == scenario.target
                               and finder.is_traversable(scenario.start))
    except (GridPathError, ValueError, OSError) as e:
        logger.error("%s", e)
        return EXIT_INVALID

    print(json.dumps({"path": [list(c) for c in path], "length": len(path)}))
    if not found:
        logger.info("No path from %s to %s", scenario.start, scenario.target)
        return EXIT_NO_PATH
    return EXIT_FOUND


if __name__ == "__main__":
    sys.exit(main())
