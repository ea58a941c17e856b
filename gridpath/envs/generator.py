#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
generator.py
------------
Seeded random obstacle fields for exercising the path finder.

Obstacles are placed as object masks (rectangles, random-growth blobs and
single cells) on a (height, width) bool canvas, optionally separated by a
moat of free cells. Difficulty can be forced:
- "any"       : no guarantee about path existence.
- "failure"   : every start -> target path is cut.
- "reachable" : a start -> target path is guaranteed.

Reproducibility: pass `seed` (recorded in settings["seed"]) or an explicit
np.random.Generator.

Dependencies:
    numpy
    scipy.ndimage   (binary dilation for the moat)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy.ndimage import binary_dilation

from .grid import Cell, OccupancyGrid, as_cell
from .scenario import Scenario
from ..planners.bfs import BFSPlanner

logger = logging.getLogger(__name__)

ENSURE_STATUSES = ("any", "failure", "reachable")


@dataclass
class GridEnvironment:
    """A generated scenario plus the settings that produced it."""
    scenario: Scenario
    settings: Dict

    @property
    def grid(self) -> OccupancyGrid:
        return self.scenario.grid()

    @property
    def start(self) -> Cell:
        return self.scenario.start

    @property
    def target(self) -> Cell:
        return self.scenario.target

    @property
    def obstacles(self) -> List[Cell]:
        return self.scenario.obstacles


# -------------------------- Shape / stamping helpers ------------------------ #

_GROWTH = np.array([(0, 1), (0, -1), (-1, 0), (1, 0)], dtype=np.int8)


def _stamp_mask(canvas: np.ndarray, top_left: Tuple[int, int], mask: np.ndarray, moat: int) -> bool:
    """
    Stamp `mask` onto `canvas` with its top-left corner at (row, col) if it
    neither overlaps nor comes within `moat` cells of an existing obstacle.
    Returns True if stamped.
    """
    H, W = canvas.shape
    mr, mc = mask.shape
    r0, c0 = top_left
    r1, c1 = r0 + mr, c0 + mc
    if r0 < 0 or c0 < 0 or r1 > H or c1 > W:
        return False

    footprint = np.zeros_like(canvas)
    footprint[r0:r1, c0:c1] = mask
    if moat > 0:
        footprint = binary_dilation(footprint, structure=np.ones((3, 3), dtype=bool), iterations=int(moat))
    if (canvas & footprint).any():
        return False

    canvas[r0:r1, c0:c1] |= mask
    return True


def _random_rectangle_mask(rng: np.random.Generator,
                           min_h: int, max_h: int,
                           min_w: int, max_w: int) -> np.ndarray:
    h = max(1, int(rng.integers(min_h, max_h + 1)))
    w = max(1, int(rng.integers(min_w, max_w + 1)))
    return np.ones((h, w), dtype=bool)


def _random_blob_mask(rng: np.random.Generator, min_cells: int, max_cells: int) -> np.ndarray:
    """Grow a 4-connected blob cell by cell; returns its tight bounding-box mask."""
    n = max(1, int(rng.integers(min_cells, max_cells + 1)))
    side = 2 * n + 1
    canvas = np.zeros((side, side), dtype=bool)
    r = c = side // 2
    canvas[r, c] = True
    coords = [(r, c)]
    while len(coords) < n:
        base_r, base_c = coords[int(rng.integers(0, len(coords)))]
        dr, dc = _GROWTH[int(rng.integers(0, len(_GROWTH)))]
        nr, nc = base_r + int(dr), base_c + int(dc)
        if not canvas[nr, nc]:
            canvas[nr, nc] = True
            coords.append((nr, nc))
    ys, xs = np.where(canvas)
    return canvas[ys.min():ys.max() + 1, xs.min():xs.max() + 1]


def _mask_to_cells(canvas: np.ndarray) -> List[Cell]:
    ys, xs = np.nonzero(canvas)
    return sorted((int(x), int(y)) for x, y in zip(xs, ys))


def _shortest_path(canvas: np.ndarray, start: Cell, target: Cell, allow_diagonals: bool):
    grid = OccupancyGrid.from_array(canvas)
    return BFSPlanner(8 if allow_diagonals else 4).shortest_path(grid, start, target)


# ------------------------------- Core generator ----------------------------- #

def generate_environment(
    width: int = 20,
    height: int = 20,
    *,
    density: Optional[float] = 0.18,
    n_objects: Optional[int] = None,
    start: Cell = (0, 0),
    target: Optional[Cell] = None,
    moat: int = 1,
    shape_probs: Optional[Dict[str, float]] = None,
    rect_size: Tuple[Tuple[int, int], Tuple[int, int]] = ((1, 4), (1, 4)),  # (min_h,max_h),(min_w,max_w)
    blob_cells: Tuple[int, int] = (2, 8),
    ensure_status: str = "any",
    allow_diagonals: bool = True,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    max_place_tries: int = 2000,
) -> GridEnvironment:
    """
    Create a random scenario of size width x height.

    Strategy:
      1) Randomly place object masks ("rect", "blob", "cell") until reaching the
         target density or object count, enforcing a moat between objects.
      2) Free start and target.
      3) Enforce `ensure_status` by plugging shortest paths ("failure") or
         clearing one ("reachable").

    Every random draw comes from a generator seeded with settings["seed"]:
    pass `seed` to reproduce an environment exactly. Without `seed`, one is
    drawn from `rng` (or fresh entropy).

    Raises ValueError for an unknown ensure_status or shape name, for both
    `rng` and `seed` given, and for a start or target outside the grid.
    """
    if ensure_status not in ENSURE_STATUSES:
        raise ValueError(f"Unknown ensure_status '{ensure_status}'. Available: {list(ENSURE_STATUSES)}")
    if rng is not None and seed is not None:
        raise ValueError("Pass either rng or seed, not both")
    if target is None:
        target = (width - 1, height - 1)
    bounds = OccupancyGrid.from_obstacles(width, height)
    start, target = as_cell(start), as_cell(target)
    for name, cell in (("start", start), ("target", target)):
        if not bounds.in_bounds(cell):
            raise ValueError(f"{name} {cell} outside {width}x{height} grid")
    if shape_probs is None:
        shape_probs = {"rect": 0.6, "blob": 0.4}
    unknown = set(shape_probs) - {"rect", "blob", "cell"}
    if unknown:
        raise ValueError(f"Unknown shapes {sorted(unknown)}")

    shape_keys = list(shape_probs.keys())
    tot = float(sum(shape_probs.values()))
    shape_p = np.array([shape_probs[k] / tot for k in shape_keys], dtype=float)

    if seed is None:
        seed = int((rng or np.random.default_rng()).integers(0, 2**31 - 1))
    rng = np.random.default_rng(seed)
    H, W = height, width
    canvas = np.zeros((H, W), dtype=bool)
    settings = dict(
        width=width, height=height, density=density, n_objects=n_objects,
        start=start, target=target, moat=moat, shape_probs=shape_probs,
        rect_size=rect_size, blob_cells=blob_cells, ensure_status=ensure_status,
        allow_diagonals=allow_diagonals, max_place_tries=max_place_tries,
        seed=int(seed),
    )

    target_cells = None
    if density is not None:
        density = float(np.clip(density, 0.0, 0.9))
        target_cells = int(round(density * H * W))

    # -------------------- 1) Random object placement -------------------- #
    placed_objects = 0
    for _ in range(max_place_tries):
        if target_cells is not None and int(canvas.sum()) >= target_cells:
            break
        if n_objects is not None and placed_objects >= int(n_objects):
            break

        shape = shape_keys[rng.choice(len(shape_keys), p=shape_p)]
        if shape == "rect":
            (min_h, max_h), (min_w, max_w) = rect_size
            mask = _random_rectangle_mask(rng, min_h, max_h, min_w, max_w)
        elif shape == "blob":
            mask = _random_blob_mask(rng, blob_cells[0], blob_cells[1])
        else:
            mask = np.ones((1, 1), dtype=bool)

        mr, mc = mask.shape
        if mr > H or mc > W:
            continue
        r0 = int(rng.integers(0, H - mr + 1))
        c0 = int(rng.integers(0, W - mc + 1))
        if _stamp_mask(canvas, (r0, c0), mask, moat=moat):
            placed_objects += 1

    # -------------------- 2) Free endpoints -------------------- #
    for x, y in (start, target):
        canvas[y, x] = False

    # -------------------- 3) Enforce difficulty -------------------- #
    if ensure_status == "failure":
        # Plug the middle of the current shortest path until none remains.
        for _ in range(H * W):
            path = _shortest_path(canvas, start, target, allow_diagonals)
            if path is None:
                break
            if len(path) <= 2:
                logger.warning("Cannot cut path between adjacent cells %s and %s", start, target)
                break
            px, py = path[len(path) // 2]
            canvas[py, px] = True

    elif ensure_status == "reachable":
        if _shortest_path(canvas, start, target, allow_diagonals) is None:
            empty = np.zeros_like(canvas)
            for px, py in _shortest_path(empty, start, target, allow_diagonals):
                canvas[py, px] = False

    scenario = Scenario(
        width=width, height=height, start=start, target=target,
        obstacles=_mask_to_cells(canvas), allow_diagonals=allow_diagonals,
    )
    logger.debug("Generated %dx%d scenario: %d objects, %d blocked cells",
                 width, height, placed_objects, len(scenario.obstacles))
    return GridEnvironment(scenario=scenario, settings=settings)


def random_obstacles(width: int, height: int, density: float,
                     rng: np.random.Generator, keep_free: Tuple[Cell, ...] = ()) -> List[Cell]:
    """Independent per-cell obstacles with probability `density`; cells in keep_free stay open."""
    canvas = rng.random((height, width)) < density
    for x, y in keep_free:
        canvas[y, x] = False
    return _mask_to_cells(canvas)
