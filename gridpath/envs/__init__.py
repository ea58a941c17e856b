# -*- coding: utf-8 -*-
"""
Grid environments.
Exposes:
- Cell, OccupancyGrid (grid.py)
- Scenario (scenario.py)
- GridEnvironment, generate_environment, random_obstacles (generator.py)
"""

from __future__ import annotations

# grid must load first: planners import it while generator imports planners.
from .grid import Cell, OccupancyGrid, as_cell
from .scenario import Scenario
from .generator import GridEnvironment, generate_environment, random_obstacles

__all__ = [
    "Cell",
    "OccupancyGrid",
    "as_cell",
    "Scenario",
    "GridEnvironment",
    "generate_environment",
    "random_obstacles",
]
