"""Text heightmap adapter for HeightmapRepository.

Implements loading of letter-encoded heightmaps from text files and returns a
domain TerrainGrid Value Object.

Format:
    One row per line, one character per cell. 'a' (lowest) .. 'z' (highest);
    exactly one 'S' (start, elevation 'a') and one 'E' (goal, elevation 'z').

Lifecycle:
1) Validate path preconditions (exists, extension, not a symlink, not empty)
2) Enforce the optional byte budget before reading the file
3) Decode text, split into lines and enforce the optional cell budget
4) Parse characters to elevations, locating the markers
5) Build TerrainGrid (which freezes its array)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from domain.terrain.errors import (
    DuplicateMarkerError,
    EmptyHeightmapError,
    GridTooLargeError,
    InvalidElevationError,
    InvalidHeightmapError,
    MissingMarkerError,
    RaggedHeightmapError,
)
from domain.terrain.value_objects import (
    GOAL_MARKER,
    START_MARKER,
    Coordinate,
    TerrainGrid,
    char_from_elevation,
    elevation_from_char,
)

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

ALLOWED_SUFFIXES = (".txt", ".in")

# Fraction of max_cells above which a loaded grid is logged as a warning
BUDGET_WARNING_RATIO = 0.8


def _strip_lines(lines: Iterable[str]) -> list[str]:
    """Drop trailing whitespace from each line and trailing blank lines."""
    rows = [line.rstrip() for line in lines]
    while rows and rows[-1] == "":
        rows.pop()
    return rows


def parse_heightmap(lines: Iterable[str]) -> TerrainGrid:
    """Parse letter-encoded heightmap rows into a TerrainGrid.

    Args:
        lines: Heightmap rows, top row first. Trailing whitespace and trailing
            blank lines are ignored.

    Returns:
        Validated TerrainGrid

    Raises:
        EmptyHeightmapError: No rows
        RaggedHeightmapError: Rows of unequal width
        InvalidElevationError: Character outside 'a'-'z', 'S', 'E'
        MissingMarkerError: No 'S' or no 'E'
        DuplicateMarkerError: More than one 'S' or 'E'
    """
    rows = _strip_lines(lines)
    if not rows:
        raise EmptyHeightmapError("Heightmap has no rows")

    width = len(rows[0])
    markers: dict[str, list[Coordinate]] = {START_MARKER: [], GOAL_MARKER: []}
    elevations: list[list[int]] = []

    for row_idx, line in enumerate(rows):
        if len(line) != width:
            raise RaggedHeightmapError(row_idx, width, len(line))
        row: list[int] = []
        for col_idx, ch in enumerate(line):
            try:
                row.append(elevation_from_char(ch))
            except InvalidElevationError as e:
                raise InvalidElevationError(
                    f"{e} at column {col_idx}, row {row_idx}"
                ) from e
            if ch in markers:
                markers[ch].append(Coordinate(column=col_idx, row=row_idx))
        elevations.append(row)

    for marker, found in markers.items():
        if not found:
            raise MissingMarkerError(f"Heightmap has no {marker!r} marker")
        if len(found) > 1:
            positions = ", ".join(f"({c.column}, {c.row})" for c in found)
            raise DuplicateMarkerError(
                f"Heightmap has {len(found)} {marker!r} markers at {positions}"
            )

    try:
        return TerrainGrid.from_rows(
            elevations,
            start=markers[START_MARKER][0],
            goal=markers[GOAL_MARKER][0],
        )
    except ValidationError as e:
        raise InvalidHeightmapError(str(e)) from e


def format_heightmap(grid: TerrainGrid) -> str:
    """Render a TerrainGrid back to its letter encoding (inverse of parse).

    Start and goal are written as 'S' and 'E'. Rows are joined with newlines,
    without a trailing newline.
    """
    lines = []
    for row_idx, row in enumerate(grid.data.tolist()):
        chars = [char_from_elevation(value) for value in row]
        if grid.start.row == row_idx:
            chars[grid.start.column] = START_MARKER
        if grid.goal.row == row_idx:
            chars[grid.goal.column] = GOAL_MARKER
        lines.append("".join(chars))
    return "\n".join(lines)


class TextHeightmapAdapter:
    """Infrastructure adapter for loading heightmaps from text files.

    Parameters
    ----------
    max_cells: int | None
        Optional budget for the number of grid cells (width*height). If
        specified and exceeded, the adapter raises GridTooLargeError.
    max_bytes: int | None
        Optional limit on the file size in bytes, checked before reading.
        Independent of max_cells: trailing blank lines, trailing whitespace and
        CRLF endings cost bytes but add no cells.
    encoding: str
        Text encoding of heightmap files.
    """

    def __init__(
        self,
        max_cells: int | None = None,
        max_bytes: int | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self.max_cells = max_cells
        self.max_bytes = max_bytes
        self.encoding = encoding

    def load_heightmap(self, file_path: Path | str) -> TerrainGrid:
        """Load a heightmap file and return a validated TerrainGrid."""
        path = Path(file_path)

        # Missing files surface as FileNotFoundError, not InvalidHeightmapError
        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.suffix.lower() not in ALLOWED_SUFFIXES:
            raise InvalidHeightmapError(f"Unsupported file extension: {path.suffix}")

        try:
            if path.is_symlink():
                raise InvalidHeightmapError("Symlinks are not permitted")
            st = path.stat()
            if st.st_size == 0:
                raise EmptyHeightmapError("Empty file")
            if self.max_bytes is not None and st.st_size > self.max_bytes:
                raise GridTooLargeError(
                    f"File size {st.st_size}B exceeds byte budget {self.max_bytes}B"
                )
            raw = path.read_bytes()
        except OSError as e:
            # Log only filename, errno and strerror; never the absolute path
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        try:
            text = raw.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise InvalidHeightmapError(
                f"Heightmap is not valid {self.encoding} text: {e.reason}"
            ) from e

        lines = text.splitlines()
        if self.max_cells is not None:
            rows = _strip_lines(lines)
            est_cells = len(rows) * (len(rows[0]) if rows else 0)
            if est_cells > self.max_cells:
                raise GridTooLargeError(
                    f"Estimated grid size {est_cells} cells exceeds budget {self.max_cells}"
                )

        grid = parse_heightmap(lines)

        cells = grid.width() * grid.height()
        if self.max_cells is not None and cells > self.max_cells * BUDGET_WARNING_RATIO:
            logger.warning(
                "Heightmap %s: %d cells uses %.0f%% of budget",
                path.name,
                cells,
                cells / self.max_cells * 100.0,
            )
        logger.debug(
            "Heightmap %s: Loaded %dx%d grid", path.name, grid.width(), grid.height()
        )
        return grid
