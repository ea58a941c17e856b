#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Breadth-First Search planner (unweighted shortest hops).
- Works on 4- or 8-directional grids with the same offsets as PathFinder.
- Every move counts as one hop, so BFS hop counts are the ground truth
  A* must match.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Union
from collections import deque
import numpy as np

from ..envs.grid import Cell, OccupancyGrid, try_cell
from .movement import connectivity_to_diagonals, directions


class BFSPlanner:
    def __init__(self, connectivity: int = 8):
        self.conn = connectivity
        self.deltas = directions(connectivity_to_diagonals(connectivity))
        self.last_expanded = 0

    @staticmethod
    def _reconstruct(parent: Dict[Cell, Cell], start: Cell, goal: Cell) -> List[Cell]:
        path = [goal]
        cur = goal
        while cur != start:
            cur = parent[cur]
            path.append(cur)
        path.reverse()
        return path

    def shortest_path(self, grid: OccupancyGrid, start: Cell, goal: Cell) -> Optional[List[Cell]]:
        """Full cell sequence start..goal, or None if goal is unreachable."""
        self.last_expanded = 0
        if not grid.is_traversable(start) or not grid.is_traversable(goal):
            return None
        if start == goal:
            return [start]

        visited = np.zeros(grid.shape, dtype=bool)
        parent: Dict[Cell, Cell] = {}
        dq = deque([start])
        visited[start[1], start[0]] = True

        while dq:
            x, y = dq.popleft()
            self.last_expanded += 1
            if (x, y) == goal:
                return self._reconstruct(parent, start, goal)
            for dx, dy in self.deltas:
                nx, ny = x + dx, y + dy
                if not grid.is_traversable((nx, ny)) or visited[ny, nx]:
                    continue
                visited[ny, nx] = True
                parent[(nx, ny)] = (x, y)
                dq.append((nx, ny))
        return None

    def plan(self, grid: Union[OccupancyGrid, np.ndarray],
             start: Sequence[int], goal: Sequence[int]) -> Dict:
        if not isinstance(grid, OccupancyGrid):
            grid = OccupancyGrid.from_array(grid)
        start, goal = try_cell(start), try_cell(goal)
        if start is None or goal is None:
            self.last_expanded = 0
            return {'success': False, 'path': None, 'expanded': 0}
        path = self.shortest_path(grid, start, goal)
        return {'success': path is not None, 'path': path, 'expanded': self.last_expanded}


def shortest_hops(grid: OccupancyGrid, start: Cell, goal: Cell,
                  allow_diagonals: bool = True) -> Optional[int]:
    """Minimum number of moves from start to goal, or None if unreachable."""
    path = BFSPlanner(8 if allow_diagonals else 4).shortest_path(grid, start, goal)
    return None if path is None else len(path) - 1


def has_path(grid: OccupancyGrid, start: Cell, goal: Cell, allow_diagonals: bool = True) -> bool:
    return shortest_hops(grid, start, goal, allow_diagonals) is not None
