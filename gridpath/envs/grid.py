#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
grid.py
-------
Immutable occupancy grid for A* queries.

Conventions:
- A cell is an (x, y) pair, 0-indexed, x < width and y < height.
- `blocked` is a read-only numpy bool array of shape (height, width),
  indexed blocked[y, x]; True = obstacle, False = free.
- Out-of-range or non-integer obstacles are rejected with InvalidObstacle, never clipped or truncated.

A new OccupancyGrid is built for every configuration; nothing mutates one
in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvalidConfiguration, InvalidObstacle

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]  # (x, y)


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def as_cell(value: Sequence[int]) -> Cell:
    """
    Normalise a 2-sequence (tuple, list, numpy row) into an (x, y) tuple of ints.

    Raises ValueError unless both coordinates are integers; floats are never truncated.
    """
    try:
        x, y = value
    except (TypeError, ValueError) as e:
        raise ValueError(f"Cell must be an (x, y) pair, got {value!r}") from e
    if not (_is_int(x) and _is_int(y)):
        raise ValueError(f"Cell coordinates must be integers, got {value!r}")
    return (int(x), int(y))


def try_cell(value) -> Optional[Cell]:
    """as_cell, or None for anything that is not an integer pair."""
    try:
        return as_cell(value)
    except ValueError:
        return None


def _check_dimension(name: str, value) -> int:
    if not _is_int(value):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidConfiguration(f"{name} must be > 0, got {value}")
    return int(value)


@dataclass(frozen=True, eq=False)
class OccupancyGrid:
    width: int
    height: int
    blocked: np.ndarray  # (height, width) bool, read-only

    @classmethod
    def from_obstacles(cls, width: int, height: int,
                       obstacles: Iterable[Sequence[int]] = ()) -> "OccupancyGrid":
        """
        Allocate a width x height grid and mark every obstacle blocked.

        The obstacle iterable is consumed once and not retained.
        Raises InvalidConfiguration for bad dimensions and InvalidObstacle for
        any coordinate outside the grid or not an integer.
        """
        W = _check_dimension("width", width)
        H = _check_dimension("height", height)
        mask = np.zeros((H, W), dtype=bool)
        for ob in obstacles:
            cell = try_cell(ob)
            if cell is None:
                raise InvalidObstacle(ob, W, H)
            x, y = cell
            if not (0 <= x < W and 0 <= y < H):
                raise InvalidObstacle((x, y), W, H)
            mask[y, x] = True
        mask.flags.writeable = False
        logger.debug("Built %dx%d grid with %d blocked cells", W, H, int(mask.sum()))
        return cls(width=W, height=H, blocked=mask)

    @classmethod
    def from_array(cls, mask: np.ndarray) -> "OccupancyGrid":
        """Build from a (height, width) array; truthy entries are obstacles. The array is copied."""
        arr = np.array(mask, dtype=bool, copy=True)
        if arr.ndim != 2:
            raise InvalidConfiguration(f"Occupancy array must be 2D, got shape {arr.shape}")
        H, W = arr.shape
        _check_dimension("width", W)
        _check_dimension("height", H)
        arr.flags.writeable = False
        return cls(width=W, height=H, blocked=arr)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    @property
    def free_count(self) -> int:
        return int(self.blocked.size - self.blocked.sum())

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, cell: Cell) -> bool:
        x, y = cell
        return bool(self.blocked[y, x])

    def is_traversable(self, cell: Cell) -> bool:
        """True iff the cell lies inside the grid and is not an obstacle."""
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height and not self.blocked[y, x]

    def obstacles(self) -> List[Cell]:
        """Blocked cells as (x, y), sorted by x then y."""
        ys, xs = np.nonzero(self.blocked)
        return sorted((int(x), int(y)) for x, y in zip(xs, ys))

    def with_obstacles(self, obstacles: Iterable[Sequence[int]]) -> "OccupancyGrid":
        """A new grid of the same size holding exactly `obstacles`."""
        return OccupancyGrid.from_obstacles(self.width, self.height, obstacles)
