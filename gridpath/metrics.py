import math
from typing import Dict, Sequence

from .envs.grid import Cell, OccupancyGrid
from .planners.movement import directions


def path_metrics(start: Cell, path: Sequence[Cell]) -> Dict:
    """Hops, geometric length and step-type counts for the moves `path` taken from `start`."""
    cells = [tuple(start)] + [tuple(c) for c in path]
    cardinal = 0
    diag = 0
    geom = 0.0
    for (x0, y0), (x1, y1) in zip(cells[:-1], cells[1:]):
        dx = abs(x1 - x0)
        dy = abs(y1 - y0)
        if dx == 1 and dy == 1:
            diag += 1
            geom += math.sqrt(2.0)
        elif dx + dy == 1:
            cardinal += 1
            geom += 1.0
        else:
            # Non-adjacent step (shouldn't happen), fallback to Euclidean
            geom += math.hypot(dx, dy)
    return {
        "hops": len(path),
        "cardinal_steps": cardinal,
        "diag_steps": diag,
        "geom_length": geom,
    }


def is_valid_traversal(grid: OccupancyGrid, start: Cell, path: Sequence[Cell],
                       allow_diagonals: bool = True) -> bool:
    """Every step is one movement-model offset and every visited cell is traversable."""
    allowed = set(directions(allow_diagonals))
    prev = tuple(start)
    for cell in path:
        cell = tuple(cell)
        if (cell[0] - prev[0], cell[1] - prev[1]) not in allowed:
            return False
        if not grid.is_traversable(cell):
            return False
        prev = cell
    return True
