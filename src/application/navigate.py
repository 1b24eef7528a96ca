"""Command-line runner: fewest steps across a heightmap.

Usage:
    terrain-navigate heightmap.txt
    terrain-navigate heightmap.txt --from-elevation a --show-route
    terrain-navigate heightmap.txt --expect 31

Prints the step count (or ``unreachable``) to stdout.

Exit codes:
    0  route found (and matches --expect, if given)
    1  heightmap could not be loaded or parsed
    2  goal unreachable under the climb rule
    3  step count differs from --expect
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from domain.navigation.services import find_route, find_route_from_elevation
from domain.navigation.value_objects import Route
from domain.terrain.errors import TerrainError
from domain.terrain.repositories import HeightmapRepository
from domain.terrain.value_objects import GOAL_MARKER, TerrainGrid, elevation_from_char
from infrastructure.terrain.heightmap_adapter import (
    TextHeightmapAdapter,
    format_heightmap,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNREACHABLE = 2
EXIT_MISMATCH = 3

UNREACHABLE = "unreachable"

# (d_column, d_row) -> glyph for the move leaving a cell
_ARROWS = {(0, -1): "^", (0, 1): "v", (-1, 0): "<", (1, 0): ">"}


def render_route(grid: TerrainGrid, route: Route) -> str:
    """Overlay a route on the heightmap text.

    Each route cell except the last shows the direction of the next move;
    the goal keeps its 'E' marker and off-route cells keep their letters.
    """
    canvas = [list(line) for line in format_heightmap(grid).split("\n")]
    for here, nxt in zip(route.path, route.path[1:]):
        arrow = _ARROWS[(nxt.column - here.column, nxt.row - here.row)]
        canvas[here.row][here.column] = arrow
    canvas[route.goal.row][route.goal.column] = GOAL_MARKER
    return "\n".join("".join(row) for row in canvas)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terrain-navigate",
        description="Fewest steps from S to E when each step climbs at most one letter.",
    )
    parser.add_argument("heightmap", type=Path, help="heightmap text file (.txt or .in)")
    parser.add_argument(
        "--from-elevation",
        metavar="CHAR",
        help="start from any cell at this elevation letter instead of S (e.g. 'a')",
    )
    parser.add_argument(
        "--expect",
        type=int,
        metavar="N",
        help="exit with status 3 unless the answer equals N",
    )
    parser.add_argument(
        "--show-route", action="store_true", help="print the route over the map"
    )
    parser.add_argument(
        "--max-cells", type=int, metavar="N", help="refuse heightmaps above N cells"
    )
    parser.add_argument(
        "--max-bytes", type=int, metavar="N", help="refuse heightmap files above N bytes"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    repository: HeightmapRepository = TextHeightmapAdapter(
        max_cells=args.max_cells, max_bytes=args.max_bytes
    )
    try:
        grid = repository.load_heightmap(args.heightmap)
        if args.from_elevation is not None:
            elevation = elevation_from_char(args.from_elevation)
            route = find_route_from_elevation(grid, elevation)
        else:
            route = find_route(grid)
    except (TerrainError, OSError) as e:
        # Filename only; the error text may already carry detail
        logger.error("%s: %s", args.heightmap.name, e)
        return EXIT_ERROR

    if route is None:
        print(UNREACHABLE)
        return EXIT_UNREACHABLE

    print(route.steps)
    if args.show_route:
        print(render_route(grid, route))

    if args.expect is not None and route.steps != args.expect:
        logger.error("Answer %d differs from expected %d", route.steps, args.expect)
        return EXIT_MISMATCH
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
