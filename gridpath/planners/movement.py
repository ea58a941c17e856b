# -*- coding: utf-8 -*-
"""
Movement models and the Chebyshev heuristic.

Every move costs 1, orthogonal or diagonal. Chebyshev distance is exact on an
empty 8-connected grid and a lower bound on a 4-connected one, so it is
admissible for both models.
"""

from __future__ import annotations
from typing import Tuple

from ..envs.grid import Cell

# Order matters: neighbours are expanded in this order, which feeds the
# insertion-order tie-break of the search.
DIRECTIONS_4: Tuple[Cell, ...] = (
    (0, 1),    # up
    (0, -1),   # down
    (-1, 0),   # left
    (1, 0),    # right
)

DIRECTIONS_8: Tuple[Cell, ...] = DIRECTIONS_4 + (
    (-1, 1),   # up-left
    (1, 1),    # up-right
    (-1, -1),  # down-left
    (1, -1),   # down-right
)

STEP_COST = 1


def directions(allow_diagonals: bool) -> Tuple[Cell, ...]:
    return DIRECTIONS_8 if allow_diagonals else DIRECTIONS_4


def connectivity_to_diagonals(connectivity: int) -> bool:
    """Map the 4/8 connectivity convention onto the diagonal flag."""
    if connectivity not in (4, 8):
        raise ValueError(f"connectivity must be 4 or 8, got {connectivity!r}")
    return connectivity == 8


def chebyshev(a: Cell, b: Cell) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))
