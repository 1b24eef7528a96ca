"""Navigation Bounded Context - Domain Services.

Pure domain logic for finding the fewest-step route across a TerrainGrid.
NO I/O operations - heightmap loading is implemented by infrastructure adapters
under `src/infrastructure/terrain/heightmap_adapter.py` via domain ports.

Climb rule:
    A move from cell A to an adjacent cell B is legal iff
    elevation(B) <= elevation(A) + 1. Descents are unrestricted, so the
    graph is directed: A -> B legal does not imply B -> A legal.

Unreachable goals are reported as ``None``, never as a numeric sentinel.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Sequence

from domain.navigation.value_objects import Route
from domain.terrain.value_objects import (
    MAX_ELEVATION,
    MIN_ELEVATION,
    Coordinate,
    TerrainGrid,
)

logger = logging.getLogger(__name__)

# Largest legal ascent in a single step
MAX_CLIMB = 1


# ---------------------------------------------------------------------------
# Climb Rule
# ---------------------------------------------------------------------------
def can_step(from_elevation: int, to_elevation: int) -> bool:
    """Check if a single move between two elevations is legal.

    Args:
        from_elevation: Elevation of the cell being left
        to_elevation: Elevation of the cell being entered

    Returns:
        True if the move climbs at most MAX_CLIMB units (any descent is legal)
    """
    return to_elevation <= from_elevation + MAX_CLIMB


# ---------------------------------------------------------------------------
# Path Reconstruction
# ---------------------------------------------------------------------------
def _reconstruct(
    parent: dict[Coordinate, Coordinate | None], goal: Coordinate
) -> list[Coordinate]:
    path = []
    cell: Coordinate | None = goal
    while cell is not None:
        path.append(cell)
        cell = parent[cell]
    path.reverse()
    return path


# ---------------------------------------------------------------------------
# Breadth-First Search
# ---------------------------------------------------------------------------
def _breadth_first(grid: TerrainGrid, sources: Sequence[Coordinate]) -> Route | None:
    """Run BFS from all sources (distance 0) until the goal receives a distance.

    Each cell moves unvisited -> enqueued (distance assigned) -> settled
    (dequeued, neighbors examined) exactly once. First assignment wins.
    """
    # Plain nested lists for the hot loop; neighbors() already bounds-checks
    heights = grid.data.tolist()
    goal = grid.goal

    distance: dict[Coordinate, int] = {}
    parent: dict[Coordinate, Coordinate | None] = {}
    frontier: deque[Coordinate] = deque()
    for source in sources:
        if source not in distance:
            distance[source] = 0
            parent[source] = None
            frontier.append(source)

    settled = 0
    while frontier and goal not in distance:
        current = frontier.popleft()
        settled += 1
        here = heights[current.row][current.column]
        for nxt in grid.neighbors(current):
            if nxt in distance:
                continue
            if not can_step(here, heights[nxt.row][nxt.column]):
                continue
            distance[nxt] = distance[current] + 1
            parent[nxt] = current
            frontier.append(nxt)
            if nxt == goal:
                break

    if goal not in distance:
        logger.debug(
            "Goal (%d, %d) unreachable: settled %d of %d cells",
            goal.column,
            goal.row,
            settled,
            grid.width() * grid.height(),
        )
        return None

    logger.debug(
        "Goal (%d, %d) reached in %d steps after settling %d cells",
        goal.column,
        goal.row,
        distance[goal],
        settled,
    )
    return Route(path=tuple(_reconstruct(parent, goal)))


# ---------------------------------------------------------------------------
# Main Services
# ---------------------------------------------------------------------------
def find_route(grid: TerrainGrid) -> Route | None:
    """Find a fewest-step route from grid.start to grid.goal.

    Args:
        grid: Validated elevation grid (never mutated)

    Returns:
        Route from start to goal, or None if the climb rule makes the goal
        unreachable. When start == goal the route has a single cell and 0 steps.

    Example:
        >>> grid = TextHeightmapAdapter().load_heightmap("heightmap.txt")
        >>> route = find_route(grid)
        >>> print("unreachable" if route is None else route.steps)
    """
    return _breadth_first(grid, (grid.start,))


def shortest_path_length(grid: TerrainGrid) -> int | None:
    """Return the minimal number of steps from start to goal, or None."""
    route = find_route(grid)
    if route is None:
        return None
    return route.steps


def find_route_from_elevation(
    grid: TerrainGrid, elevation: int = MIN_ELEVATION
) -> Route | None:
    """Find the fewest-step route to the goal from ANY cell at ``elevation``.

    All cells at that elevation seed the frontier at distance 0 (one
    multi-source BFS). The route starts at whichever seed is closest; ties go
    to the seed enqueued first, in row-major order.

    Args:
        grid: Validated elevation grid (never mutated)
        elevation: Starting elevation, defaults to the lowest ('a')

    Returns:
        Route, or None if no cell has that elevation or none reaches the goal

    Raises:
        ValueError: If elevation is outside [MIN_ELEVATION, MAX_ELEVATION]
    """
    if not (MIN_ELEVATION <= elevation <= MAX_ELEVATION):
        raise ValueError(
            f"elevation must be in [{MIN_ELEVATION}, {MAX_ELEVATION}], got {elevation}"
        )
    sources = grid.cells_at(elevation)
    if not sources:
        logger.debug("No cells at elevation %d", elevation)
        return None
    return _breadth_first(grid, sources)
