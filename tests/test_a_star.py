import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np
import pytest

from gridpath import PathFinder, InvalidConfiguration, InvalidObstacle, InvalidQuery
from gridpath.envs.generator import random_obstacles
from gridpath.envs.grid import OccupancyGrid
from gridpath.metrics import is_valid_traversal
from gridpath.planners.a_star import reconstruct

# Vertical wall at x=2 with a single gap at (2,4)
WALL = [(2, 0), (2, 1), (2, 2), (2, 3)]


def make_finder(width=5, height=5, obstacles=(), **kwargs):
    finder = PathFinder(**kwargs)
    finder.configure(width, height, obstacles)
    return finder


# --- Shortest paths -------------------------------------------------------------
def test_wall_with_gap_diagonal():
    finder = make_finder(obstacles=WALL)
    path = finder.find_path((0, 0), (4, 4), allow_diagonals=True)
    assert len(path) == 6
    assert path[-1] == (4, 4)
    assert (2, 4) in path
    assert (0, 0) not in path
    assert is_valid_traversal(finder.grid, (0, 0), path, allow_diagonals=True)


def test_wall_with_gap_orthogonal():
    finder = make_finder(obstacles=WALL)
    path = finder.find_path((0, 0), (4, 4), allow_diagonals=False)
    assert len(path) == 8
    assert path[-1] == (4, 4)
    assert (2, 4) in path
    assert is_valid_traversal(finder.grid, (0, 0), path, allow_diagonals=False)


def test_open_grid_diagonal_is_chebyshev():
    finder = make_finder(10, 7)
    path = finder.find_path((1, 1), (8, 3))
    assert len(path) == 7


def test_open_grid_orthogonal_is_manhattan():
    finder = make_finder(10, 7, allow_diagonals=False)
    path = finder.find_path((1, 1), (8, 3))
    assert len(path) == 9


def test_start_equals_target_is_empty():
    finder = make_finder(obstacles=WALL)
    assert finder.find_path((3, 3), (3, 3)) == []
    assert finder.find_path((3, 3), (3, 3), allow_diagonals=False) == []


# --- Tie-breaking ---------------------------------------------------------------
def test_tie_break_orthogonal_open_3x3():
    # Equal f: lower g first, then insertion order (up, down, left, right).
    finder = make_finder(3, 3, allow_diagonals=False)
    assert finder.find_path((0, 0), (2, 2)) == [(0, 1), (1, 1), (1, 2), (2, 2)]


def test_tie_break_diagonal_open_3x3():
    finder = make_finder(3, 3)
    assert finder.find_path((0, 0), (2, 2)) == [(1, 1), (2, 2)]


def test_determinism_repeated_and_across_instances():
    rng = np.random.default_rng(7)
    for _ in range(20):
        obstacles = random_obstacles(12, 12, 0.25, rng, keep_free=((0, 0), (11, 11)))
        for diag in (True, False):
            a = make_finder(12, 12, obstacles)
            b = make_finder(12, 12, obstacles)
            first = a.find_path((0, 0), (11, 11), diag)
            assert a.find_path((0, 0), (11, 11), diag) == first
            assert b.find_path((0, 0), (11, 11), diag) == first


# --- No path ----------------------------------------------------------------------
def test_enclosed_target_has_no_path():
    finder = make_finder(obstacles=[(3, 3), (3, 4), (4, 3)])
    assert finder.find_path((0, 0), (4, 4), allow_diagonals=True) == []
    assert finder.find_path((0, 0), (4, 4), allow_diagonals=False) == []


def test_diagonal_gap_only_passable_with_diagonals():
    # Target cornered orthogonally but reachable through (3,3)
    finder = make_finder(obstacles=[(3, 4), (4, 3)])
    assert finder.find_path((0, 0), (4, 4), allow_diagonals=False) == []
    assert finder.find_path((0, 0), (4, 4), allow_diagonals=True)[-2:] == [(3, 3), (4, 4)]


def test_blocked_or_out_of_bounds_endpoints_return_empty():
    finder = make_finder(obstacles=WALL)
    assert finder.find_path((0, 0), (2, 1)) == []    # target blocked
    assert finder.find_path((2, 1), (4, 4)) == []    # start blocked
    assert finder.find_path((0, 0), (5, 4)) == []    # target out of bounds
    assert finder.find_path((-1, 0), (4, 4)) == []   # start out of bounds


def test_strict_mode_raises_invalid_query():
    finder = make_finder(obstacles=WALL, strict=True)
    with pytest.raises(InvalidQuery):
        finder.find_path((0, 0), (2, 1))
    with pytest.raises(InvalidQuery):
        finder.find_path((0, 0), (0, 9))
    with pytest.raises(InvalidQuery):
        finder.find_path((-1, 0), (4, 4))
    # Unreachable but valid endpoints are still just "no path"
    enclosed = make_finder(obstacles=[(3, 3), (3, 4), (4, 3)], strict=True)
    assert enclosed.find_path((0, 0), (4, 4)) == []


# --- Configuration ----------------------------------------------------------------
@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-3, 5), (5, 2.5), (True, 5)])
def test_invalid_dimensions_rejected(width, height):
    with pytest.raises(InvalidConfiguration):
        PathFinder().configure(width, height, [])


@pytest.mark.parametrize("cell", [(5, 0), (0, 5), (-1, 2), (2, -1)])
def test_out_of_bounds_obstacle_rejected(cell):
    with pytest.raises(InvalidObstacle) as exc:
        PathFinder().configure(5, 5, [(1, 1), cell])
    assert exc.value.cell == cell
    assert isinstance(exc.value, InvalidConfiguration)
    assert isinstance(exc.value, ValueError)


def test_search_before_configure_raises():
    with pytest.raises(InvalidConfiguration):
        PathFinder().find_path((0, 0), (1, 1))


def test_failed_configure_keeps_previous_grid():
    finder = make_finder(obstacles=WALL)
    with pytest.raises(InvalidObstacle):
        finder.configure(5, 5, [(9, 9)])
    assert len(finder.find_path((0, 0), (4, 4))) == 6


def test_reconfiguration_drops_stale_obstacles():
    finder = make_finder(obstacles=WALL)
    assert len(finder.find_path((0, 0), (4, 4))) == 6
    finder.configure(5, 5, [])
    assert len(finder.find_path((0, 0), (4, 4))) == 4
    finder.configure(5, 5, [(3, 3), (3, 4), (4, 3)])
    assert finder.find_path((0, 0), (4, 4)) == []
    finder.configure(3, 3, [])
    assert finder.find_path((0, 0), (4, 4)) == []


def test_configure_copies_obstacles():
    obstacles = list(WALL)
    finder = make_finder(obstacles=obstacles)
    obstacles.append((2, 4))
    assert len(finder.find_path((0, 0), (4, 4))) == 6
    assert not finder.grid.blocked.flags.writeable


def test_is_traversable():
    finder = make_finder(obstacles=WALL)
    assert finder.is_traversable((0, 0))
    assert finder.is_traversable([2, 4])
    assert not finder.is_traversable((2, 0))
    assert not finder.is_traversable((5, 0))
    assert not finder.is_traversable((0, -1))


def test_find_path_and_update_grid():
    finder = PathFinder()
    path = finder.find_path_and_update_grid(5, 5, WALL, (0, 0), (4, 4), allow_diagonals=False)
    assert len(path) == 8
    path = finder.find_path_and_update_grid(5, 5, [], (0, 0), (4, 4))
    assert len(path) == 4


def test_constructor_movement_defaults():
    assert len(make_finder(obstacles=WALL, allow_diagonals=False).find_path((0, 0), (4, 4))) == 8
    assert len(make_finder(obstacles=WALL, connectivity=4).find_path((0, 0), (4, 4))) == 8
    assert len(make_finder(obstacles=WALL, connectivity=8).find_path((0, 0), (4, 4))) == 6
    with pytest.raises(ValueError):
        PathFinder(connectivity=6)


def test_lists_accepted_tuples_returned():
    finder = make_finder()
    path = finder.find_path([0, 0], [2, 0])
    assert path == [(1, 0), (2, 0)]
    assert all(isinstance(c, tuple) for c in path)


# --- Expansion ceiling --------------------------------------------------------
def test_max_expansions_stops_search():
    finder = make_finder(20, 20, max_expansions=1)
    assert finder.find_path((0, 0), (19, 19)) == []
    assert finder.last_expanded == 1
    roomy = make_finder(20, 20, max_expansions=400)
    assert len(roomy.find_path((0, 0), (19, 19))) == 19


def test_max_expansions_must_be_positive():
    with pytest.raises(InvalidConfiguration):
        PathFinder(max_expansions=0)


# --- Unified plan() API and reconstruction --------------------------------------
def test_plan_includes_start():
    grid = OccupancyGrid.from_obstacles(5, 5, WALL)
    out = PathFinder(connectivity=8).plan(grid, (0, 0), (4, 4))
    assert out["success"]
    assert out["path"][0] == (0, 0)
    assert len(out["path"]) == 7
    assert out["expanded"] > 0


def test_plan_accepts_numpy_mask():
    mask = np.zeros((3, 4), dtype=bool)   # height 3, width 4
    mask[:, 1] = True
    out = PathFinder(connectivity=8).plan(mask, (0, 0), (3, 2))
    assert not out["success"] and out["path"] is None
    mask[2, 1] = False
    out = PathFinder(connectivity=8).plan(mask, (0, 0), (3, 2))
    assert out["success"] and out["path"][-1] == (3, 2)


def test_plan_start_equals_goal():
    grid = OccupancyGrid.from_obstacles(3, 3)
    out = PathFinder().plan(grid, (1, 1), (1, 1))
    assert out == {"success": True, "path": [(1, 1)], "expanded": 0}


def test_reconstruct_excludes_start():
    came_from = {(1, 0): (0, 0), (2, 1): (1, 0), (3, 1): (2, 1)}
    assert reconstruct(came_from, (3, 1)) == [(1, 0), (2, 1), (3, 1)]
    assert reconstruct(came_from, (0, 0)) == []


# --- Non-integer coordinates --------------------------------------------------
@pytest.mark.parametrize("cell", [(-0.5, 0), (1.0, 2), ("1", 2), (1,), 7])
def test_non_integer_obstacle_rejected(cell):
    finder = PathFinder()
    with pytest.raises(InvalidObstacle):
        finder.configure(5, 5, [cell])
    assert finder.grid is None


def test_non_integer_endpoints_are_unreachable():
    finder = make_finder()
    assert finder.find_path((0.9, 0.9), (2, 0)) == []
    assert finder.find_path((0, 0), (2.0, 0)) == []
    assert finder.last_expanded == 0
    assert not finder.is_traversable((0.5, 0))
    out = PathFinder().plan(finder.grid, (0, 0), (1.5, 1))
    assert out == {"success": False, "path": None, "expanded": 0}


def test_non_integer_endpoints_strict():
    finder = make_finder(strict=True)
    with pytest.raises(InvalidQuery):
        finder.find_path((0.9, 0.9), (2, 0))
    with pytest.raises(InvalidQuery):
        finder.find_path((0, 0), "4,4")


def test_numpy_integer_endpoints_accepted():
    finder = make_finder(obstacles=np.array(WALL))
    path = finder.find_path(np.array([0, 0]), np.array([4, 4]))
    assert len(path) == 6
