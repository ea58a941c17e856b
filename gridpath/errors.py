# -*- coding: utf-8 -*-
"""
Error types raised at the two input boundaries of the package:
grid configuration and path queries. Nothing inside the search loop raises.
"""

from __future__ import annotations


class GridPathError(ValueError):
    """Base class for every error raised by gridpath."""


class InvalidConfiguration(GridPathError):
    """Grid dimensions are not strictly positive integers, or no grid was configured."""


class InvalidObstacle(InvalidConfiguration):
    """An obstacle is not an integer cell inside [0, width) x [0, height)."""

    def __init__(self, cell, width: int, height: int):
        self.cell = cell
        self.width = width
        self.height = height
        super().__init__(f"Obstacle {cell!r} is not a cell of the {width}x{height} grid")


class InvalidQuery(GridPathError):
    """Start or target is malformed, out of bounds or blocked (strict finders only)."""


class InvalidScenario(GridPathError):
    """A scenario file or dict is missing fields or has malformed values."""
