# -*- coding: utf-8 -*-
"""
Top-level package for A* grid path finding.
Provides the PathFinder, its error types and a convenience planner factory.
"""

from __future__ import annotations
from typing import Any

from .envs.grid import Cell, OccupancyGrid
from .errors import (
    GridPathError,
    InvalidConfiguration,
    InvalidObstacle,
    InvalidQuery,
    InvalidScenario,
)
from .planners.a_star import PathFinder

__all__ = [
    "__version__",
    "get_planner",
    "Cell",
    "OccupancyGrid",
    "PathFinder",
    "GridPathError",
    "InvalidConfiguration",
    "InvalidObstacle",
    "InvalidQuery",
    "InvalidScenario",
]

__version__ = "0.1.0"


def get_planner(name: str, **kwargs) -> Any:
    """
    Factory: instantiate a planner by name.

    Parameters
    ----------
    name : str
        One of: 'a_star', 'bfs'
    kwargs : dict
        Passed to the planner constructor (e.g., connectivity=8)

    Returns
    -------
    planner instance
    """
    name = name.strip().lower()
    from .planners import PLANNERS  # lazy import
    if name not in PLANNERS:
        raise ValueError(f"Unknown planner '{name}'. Available: {sorted(PLANNERS)}")
    return PLANNERS[name](**kwargs)
