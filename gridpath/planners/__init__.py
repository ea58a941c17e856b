# -*- coding: utf-8 -*-
"""
Planners on occupancy grids with a unified API:
planner.plan(grid: OccupancyGrid | np.ndarray[bool], start: (x,y), goal: (x,y))
  -> {'success': bool, 'path': List[(x,y)] or None, 'expanded': int}

PathFinder additionally exposes configure()/find_path(), which return only the
moves after start.
"""

from __future__ import annotations
from typing import Dict, Type

from .a_star import PathFinder, reconstruct
from .bfs import BFSPlanner, has_path, shortest_hops
from .movement import DIRECTIONS_4, DIRECTIONS_8, chebyshev, directions

# Mapping used by factories/CLIs
PLANNERS: Dict[str, Type] = {
    "a_star": PathFinder,
    "bfs": BFSPlanner,
}

__all__ = [
    "PathFinder",
    "BFSPlanner",
    "PLANNERS",
    "DIRECTIONS_4",
    "DIRECTIONS_8",
    "chebyshev",
    "directions",
    "reconstruct",
    "has_path",
    "shortest_hops",
]
