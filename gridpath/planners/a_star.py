#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
A* path finder on occupancy grids (4- or 8-directional, unit step cost).
- Obstacles are True in the grid; free space is False.
- Heuristic: Chebyshev for both movement models.
- Open set: binary heap keyed (f, g, seq); ties on f go to the lower g, then
  to the earlier insertion. Stale heap entries are skipped on pop.

find_path() returns the moves to make: cells after start up to and including
target. An empty list means no path (or start == target).
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union
import heapq
import logging

import numpy as np

from ..envs.grid import Cell, OccupancyGrid, try_cell
from ..errors import InvalidConfiguration, InvalidQuery
from .movement import STEP_COST, chebyshev, connectivity_to_diagonals, directions

logger = logging.getLogger(__name__)


def reconstruct(came_from: Dict[Cell, Cell], target: Cell) -> List[Cell]:
    """Walk predecessors back from target; the start cell (no predecessor) is left out."""
    path: List[Cell] = []
    cur = target
    while cur in came_from:
        path.append(cur)
        cur = came_from[cur]
    path.reverse()
    return path


class PathFinder:
    def __init__(self, allow_diagonals: bool = True, strict: bool = False,
                 max_expansions: Optional[int] = None, connectivity: Optional[int] = None):
        """
        allow_diagonals : default movement model for find_path (8-directional if True)
        strict          : raise InvalidQuery for malformed, out-of-bounds or blocked start/target
                          instead of returning an empty path
        max_expansions  : stop and return no path after this many expanded cells
        connectivity    : 4 or 8, overrides allow_diagonals (registry convention)
        """
        if connectivity is not None:
            allow_diagonals = connectivity_to_diagonals(connectivity)
        if max_expansions is not None and max_expansions <= 0:
            raise InvalidConfiguration(f"max_expansions must be > 0, got {max_expansions}")
        self.allow_diagonals = bool(allow_diagonals)
        self.strict = strict
        self.max_expansions = max_expansions
        self.grid: Optional[OccupancyGrid] = None
        self.last_expanded = 0

    # -------------------- configuration -------------------- #

    def configure(self, width: int, height: int, obstacles: Iterable[Sequence[int]] = ()) -> None:
        """Replace the grid with a fresh width x height grid holding `obstacles`."""
        self.grid = OccupancyGrid.from_obstacles(width, height, obstacles)

    def configure_grid(self, grid: OccupancyGrid) -> None:
        self.grid = grid

    def is_traversable(self, cell: Sequence[int]) -> bool:
        grid = self._require_grid()
        cell = try_cell(cell)
        return cell is not None and grid.is_traversable(cell)

    def _require_grid(self) -> OccupancyGrid:
        if self.grid is None:
            raise InvalidConfiguration("PathFinder.configure() must run before searching")
        return self.grid

    # -------------------- queries -------------------- #

    def find_path(self, start: Sequence[int], target: Sequence[int],
                  allow_diagonals: Optional[bool] = None) -> List[Cell]:
        grid = self._require_grid()
        if allow_diagonals is None:
            allow_diagonals = self.allow_diagonals
        endpoints = self._parse_endpoints(start, target)
        if endpoints is None:
            return []
        path = self._search(grid, endpoints[0], endpoints[1], allow_diagonals)
        return path or []

    def find_path_and_update_grid(self, width: int, height: int,
                                  obstacles: Iterable[Sequence[int]],
                                  start: Sequence[int], target: Sequence[int],
                                  allow_diagonals: Optional[bool] = None) -> List[Cell]:
        self.configure(width, height, obstacles)
        return self.find_path(start, target, allow_diagonals)

    def plan(self, grid: Union[OccupancyGrid, np.ndarray],
             start: Sequence[int], goal: Sequence[int]) -> Dict:
        """
        Unified planner API shared with BFSPlanner.

        Returns {'success': bool, 'path': [start, ..., goal] or None, 'expanded': int}.
        The path here includes the start cell. Uses the finder's own movement model.
        """
        if not isinstance(grid, OccupancyGrid):
            grid = OccupancyGrid.from_array(grid)
        endpoints = self._parse_endpoints(start, goal)
        if endpoints is None:
            return {'success': False, 'path': None, 'expanded': 0}
        start, goal = endpoints
        moves = self._search(grid, start, goal, self.allow_diagonals)
        if moves is None:
            return {'success': False, 'path': None, 'expanded': self.last_expanded}
        return {'success': True, 'path': [start] + moves, 'expanded': self.last_expanded}

    # -------------------- search -------------------- #

    def _parse_endpoints(self, start, target) -> Optional[Tuple[Cell, Cell]]:
        """Integer (x, y) endpoints, or None (InvalidQuery if strict) for malformed ones."""
        self.last_expanded = 0
        cells = []
        for name, value in (("start", start), ("target", target)):
            cell = try_cell(value)
            if cell is None:
                if self.strict:
                    raise InvalidQuery(f"{name} {value!r} is not an integer cell")
                logger.debug("%s %r is not an integer cell; no path", name, value)
                return None
            cells.append(cell)
        return cells[0], cells[1]

    def _check_endpoints(self, grid: OccupancyGrid, start: Cell, target: Cell) -> bool:
        for name, cell in (("start", start), ("target", target)):
            if grid.is_traversable(cell):
                continue
            reason = "out of bounds" if not grid.in_bounds(cell) else "blocked"
            if self.strict:
                raise InvalidQuery(f"{name} {cell} is {reason}")
            logger.debug("%s %s is %s; no path", name, cell, reason)
            return False
        return True

    def _search(self, grid: OccupancyGrid, start: Cell, target: Cell,
                allow_diagonals: bool) -> Optional[List[Cell]]:
        """
        Run A*. Returns the moves from start to target, [] when start == target,
        or None when target is unreachable.
        """
        self.last_expanded = 0
        if not self._check_endpoints(grid, start, target):
            return None
        if start == target:
            return []

        deltas = directions(allow_diagonals)
        W, H = grid.width, grid.height
        blocked = grid.blocked

        h_start = chebyshev(start, target)
        g_score: Dict[Cell, int] = {start: 0}
        f_score: Dict[Cell, int] = {start: h_start}
        came_from: Dict[Cell, Cell] = {}
        open_set: Set[Cell] = {start}
        closed: Set[Cell] = set()
        seq = 0
        pq: List[Tuple[int, int, int, Cell]] = [(h_start, 0, seq, start)]
        expanded = 0

        while pq:
            _, g_cur, _, current = heapq.heappop(pq)

            # Skip stale entries
            if current in closed or g_cur != g_score[current]:
                continue

            if current == target:
                self.last_expanded = expanded
                path = reconstruct(came_from, current)
                logger.debug("Path %s -> %s: %d moves, %d expanded",
                             start, target, len(path), expanded)
                return path

            if self.max_expansions is not None and expanded >= self.max_expansions:
                self.last_expanded = expanded
                logger.warning("Expansion limit %d reached searching %s -> %s",
                               self.max_expansions, start, target)
                return None

            open_set.discard(current)
            closed.add(current)
            expanded += 1

            cx, cy = current
            for dx, dy in deltas:
                nx, ny = cx + dx, cy + dy
                if nx < 0 or nx >= W or ny < 0 or ny >= H or blocked[ny, nx]:
                    continue
                neighbor = (nx, ny)
                if neighbor in closed:
                    continue

                tentative_g = g_cur + STEP_COST
                if neighbor not in open_set or tentative_g < g_score[neighbor]:
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative_g
                    f_score[neighbor] = tentative_g + chebyshev(neighbor, target)
                    seq += 1
                    heapq.heappush(pq, (f_score[neighbor], tentative_g, seq, neighbor))
                    open_set.add(neighbor)

        self.last_expanded = expanded
        logger.debug("No path %s -> %s after %d expansions", start, target, expanded)
        return None
