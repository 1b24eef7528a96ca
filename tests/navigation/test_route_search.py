"""Tests for navigation services: climb rule, BFS route search, Route invariants.

Grids are built with TerrainGrid.from_rows and the domain elevation codec, so
these tests do not depend on the infrastructure parser.
"""

from __future__ import annotations

import numpy as np
import pytest
from pydantic import ValidationError

from domain.navigation.services import (
    can_step,
    find_route,
    find_route_from_elevation,
    shortest_path_length,
)
from domain.navigation.value_objects import Route
from domain.terrain.value_objects import (
    GOAL_MARKER,
    MAX_ELEVATION,
    START_MARKER,
    Coordinate,
    TerrainGrid,
    elevation_from_char,
)

CANONICAL_ROWS = [
    "Sabqponm",
    "abcryxxl",
    "accszExk",
    "acctuvwj",
    "abdefghi",
]


# ---------------------------------------------------------------------------
# Test Fixture Helpers - Create TerrainGrids directly (no I/O)
# ---------------------------------------------------------------------------
def at(column: int, row: int) -> Coordinate:
    return Coordinate(column=column, row=row)


def grid_from_letters(rows: list[str]) -> TerrainGrid:
    """Build a TerrainGrid from letter rows containing one 'S' and one 'E'."""
    start = goal = None
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            if ch == START_MARKER:
                start = at(c, r)
            elif ch == GOAL_MARKER:
                goal = at(c, r)
    elevations = [[elevation_from_char(ch) for ch in line] for line in rows]
    return TerrainGrid.from_rows(elevations, start=start, goal=goal)


def create_random_grid(seed: int, size: int = 4, max_elevation: int = 3) -> TerrainGrid:
    """Small random grid; start top-left, goal placed by the same RNG."""
    rng = np.random.default_rng(seed)
    data = rng.integers(0, max_elevation + 1, size=(size, size))
    goal_index = int(rng.integers(0, size * size))
    return TerrainGrid(
        data=data,
        start=at(0, 0),
        goal=at(goal_index % size, goal_index // size),
    )


def exhaustive_shortest(grid: TerrainGrid) -> int | None:
    """Independent reference: depth-first search over every simple legal path."""
    best: list[int | None] = [None]
    visited: set[Coordinate] = {grid.start}

    def walk(cell: Coordinate, length: int) -> None:
        if best[0] is not None and length >= best[0]:
            return
        if cell == grid.goal:
            best[0] = length
            return
        here = grid.elevation_at(cell)
        for nxt in grid.neighbors(cell):
            if nxt in visited or grid.elevation_at(nxt) > here + 1:
                continue
            visited.add(nxt)
            walk(nxt, length + 1)
            visited.remove(nxt)

    walk(grid.start, 0)
    return best[0]


def assert_legal_route(grid: TerrainGrid, route: Route) -> None:
    assert route.start == grid.start
    assert route.goal == grid.goal
    for here, nxt in zip(route.path, route.path[1:]):
        assert nxt in grid.neighbors(here)
        assert grid.elevation_at(nxt) <= grid.elevation_at(here) + 1


# ===========================================================================
# Climb Rule
# ===========================================================================
@pytest.mark.parametrize(
    "from_elevation, to_elevation, expected",
    [
        (0, 0, True),  # flat
        (0, 1, True),  # climb one
        (0, 2, False),  # climb two
        (5, 7, False),
        (24, 25, True),
        (25, 0, True),  # any descent
        (10, 3, True),
    ],
)
def test_can_step(from_elevation, to_elevation, expected):
    assert can_step(from_elevation, to_elevation) is expected


def test_can_step_is_directional():
    assert can_step(2, 0)
    assert not can_step(0, 2)


# ===========================================================================
# Canonical Scenario
# ===========================================================================
def test_canonical_grid_31_steps():
    grid = grid_from_letters(CANONICAL_ROWS)
    assert grid.width() == 8
    assert grid.height() == 5
    assert shortest_path_length(grid) == 31


def test_canonical_route_is_legal():
    grid = grid_from_letters(CANONICAL_ROWS)
    route = find_route(grid)
    assert route is not None
    assert route.steps == 31
    assert len(route.path) == 32
    assert_legal_route(grid, route)


def test_canonical_from_lowest_29_steps():
    grid = grid_from_letters(CANONICAL_ROWS)
    route = find_route_from_elevation(grid)
    assert route is not None
    assert route.steps == 29
    assert grid.elevation_at(route.start) == 0
    assert route.goal == grid.goal


# ===========================================================================
# Boundary Cases
# ===========================================================================
def test_single_cell_grid_zero_steps():
    grid = TerrainGrid(
        data=np.zeros((1, 1), dtype=np.uint8), start=at(0, 0), goal=at(0, 0)
    )
    route = find_route(grid)
    assert route is not None
    assert route.steps == 0
    assert route.path == (at(0, 0),)


def test_start_equals_goal_zero_steps():
    grid = TerrainGrid.from_rows([[0, 5, 9], [3, 25, 1]], start=at(1, 1), goal=at(1, 1))
    assert shortest_path_length(grid) == 0


def test_adjacent_legal_step_is_one():
    grid = TerrainGrid.from_rows([[3, 4]], start=at(0, 0), goal=at(1, 0))
    assert shortest_path_length(grid) == 1


def test_adjacent_descent_is_one():
    grid = TerrainGrid.from_rows([[25], [0]], start=at(0, 0), goal=at(0, 1))
    assert shortest_path_length(grid) == 1


def test_edges_are_directed():
    # Climbing 0 -> 2 is illegal; descending 2 -> 0 is legal
    up = TerrainGrid.from_rows([[0, 2]], start=at(0, 0), goal=at(1, 0))
    down = TerrainGrid.from_rows([[0, 2]], start=at(1, 0), goal=at(0, 0))
    assert shortest_path_length(up) is None
    assert shortest_path_length(down) == 1


def test_detour_around_cliff():
    # Direct climb 0 -> 2 is blocked; the 1 in the row below makes a detour
    grid = TerrainGrid.from_rows([[0, 2], [1, 1]], start=at(0, 0), goal=at(1, 0))
    route = find_route(grid)
    assert route is not None
    assert route.steps == 3
    assert_legal_route(grid, route)


# ===========================================================================
# Unreachable
# ===========================================================================
def test_wall_of_peaks_unreachable():
    grid = grid_from_letters(["Sabzxy", "abczyE", "abczxy"])
    assert find_route(grid) is None
    assert shortest_path_length(grid) is None


def test_unreachable_is_not_zero():
    grid = TerrainGrid.from_rows([[0, 25]], start=at(0, 0), goal=at(1, 0))
    result = shortest_path_length(grid)
    assert result is None
    assert result != 0


def test_unreachable_logged_at_debug(caplog):
    grid = grid_from_letters(["Sabzxy", "abczyE", "abczxy"])
    caplog.set_level("DEBUG", logger="domain.navigation.services")
    find_route(grid)
    assert "unreachable" in caplog.text


def test_from_elevation_behind_wall_unreachable():
    grid = grid_from_letters(["Sabzxy", "abczyE", "abczxy"])
    assert find_route_from_elevation(grid) is None


# ===========================================================================
# Purity and Idempotence
# ===========================================================================
def test_repeated_calls_identical():
    grid = grid_from_letters(CANONICAL_ROWS)
    first = find_route(grid)
    second = find_route(grid)
    assert first == second
    assert shortest_path_length(grid) == shortest_path_length(grid) == 31


def test_grid_not_mutated():
    grid = grid_from_letters(CANONICAL_ROWS)
    before = grid.data.copy()
    find_route(grid)
    find_route_from_elevation(grid)
    assert np.array_equal(grid.data, before)
    assert not grid.data.flags.writeable


# ===========================================================================
# Exhaustive Cross-Check on Small Grids
# ===========================================================================
@pytest.mark.slow
@pytest.mark.parametrize("seed", range(30))
def test_matches_exhaustive_search(seed):
    grid = create_random_grid(seed)
    expected = exhaustive_shortest(grid)
    route = find_route(grid)
    if expected is None:
        assert route is None
    else:
        assert route is not None
        assert route.steps == expected
        assert_legal_route(grid, route)


@pytest.mark.parametrize("seed", range(10))
def test_random_routes_obey_climb_rule(seed):
    grid = create_random_grid(seed, size=12, max_elevation=6)
    route = find_route(grid)
    if route is not None:
        assert_legal_route(grid, route)


# ===========================================================================
# find_route_from_elevation
# ===========================================================================
def test_from_elevation_includes_start_cell():
    # 'S' is the only lowest cell: same route as from S
    grid = grid_from_letters(["SbcdefghijklmnopqrstuvwxyE"])
    route = find_route_from_elevation(grid)
    assert route is not None
    assert route == find_route(grid)
    assert route.steps == 25


def test_from_goal_elevation_is_zero_steps():
    grid = grid_from_letters(CANONICAL_ROWS)
    route = find_route_from_elevation(grid, MAX_ELEVATION)
    assert route is not None
    assert route.steps == 0


def test_from_missing_elevation_returns_none():
    grid = TerrainGrid.from_rows([[0, 1, 2]], start=at(0, 0), goal=at(2, 0))
    assert find_route_from_elevation(grid, 5) is None


@pytest.mark.parametrize("elevation", [-1, 26])
def test_from_elevation_out_of_range(elevation):
    grid = grid_from_letters(CANONICAL_ROWS)
    with pytest.raises(ValueError, match="elevation must be"):
        find_route_from_elevation(grid, elevation)


# ===========================================================================
# Route Invariants
# ===========================================================================
class TestRouteInvariants:
    def test_steps_start_goal(self):
        route = Route(path=(at(0, 0), at(1, 0), at(1, 1)))
        assert route.steps == 2
        assert route.start == at(0, 0)
        assert route.goal == at(1, 1)

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            Route(path=())

    def test_diagonal_move_rejected(self):
        with pytest.raises(ValidationError, match="not adjacent"):
            Route(path=(at(0, 0), at(1, 1)))

    def test_repeated_cell_rejected(self):
        with pytest.raises(ValidationError, match="not adjacent"):
            Route(path=(at(0, 0), at(0, 0)))

    def test_route_immutable(self):
        route = Route(path=(at(0, 0),))
        with pytest.raises(ValidationError):
            route.path = (at(1, 1),)
