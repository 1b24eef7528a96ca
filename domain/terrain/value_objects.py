"""Terrain Bounded Context - Value Objects.

Immutable data structures describing a heightmap: cell coordinates and the
elevation grid with its start and goal markers.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.terrain.errors import (
    CoordinateOutOfBoundsError,
    EmptyHeightmapError,
    InvalidElevationError,
    RaggedHeightmapError,
)

# ---------------------------------------------------------------------------
# Elevation Codec
# ---------------------------------------------------------------------------
MIN_ELEVATION = 0  # 'a'
MAX_ELEVATION = 25  # 'z'

START_MARKER = "S"
GOAL_MARKER = "E"
START_ELEVATION = MIN_ELEVATION  # 'S' sits at elevation 'a'
GOAL_ELEVATION = MAX_ELEVATION  # 'E' sits at elevation 'z'

_LOWEST_CHAR = "a"
_HIGHEST_CHAR = "z"


def elevation_from_char(ch: str) -> int:
    """Decode a heightmap character ('a'..'z', 'S', 'E') into an elevation.

    Raises:
        InvalidElevationError: If ``ch`` is not a valid heightmap character
    """
    if ch == START_MARKER:
        return START_ELEVATION
    if ch == GOAL_MARKER:
        return GOAL_ELEVATION
    if len(ch) == 1 and _LOWEST_CHAR <= ch <= _HIGHEST_CHAR:
        return ord(ch) - ord(_LOWEST_CHAR)
    raise InvalidElevationError(f"Invalid elevation character: {ch!r}")


def char_from_elevation(value: int) -> str:
    """Encode an elevation as its heightmap letter."""
    if not (MIN_ELEVATION <= value <= MAX_ELEVATION):
        raise InvalidElevationError(
            f"Elevation out of range [{MIN_ELEVATION}, {MAX_ELEVATION}]: {value}"
        )
    return chr(ord(_LOWEST_CHAR) + value)


# (d_column, d_row) in neighbor order: up, down, left, right
_ORTHOGONAL_STEPS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))


class Coordinate(BaseModel):
    """Grid cell address (Value Object).

    Invariants:
        C-1: column >= 0
        C-2: row >= 0

    Frozen Pydantic models compare and hash by value, so Coordinates can be
    used directly as dict keys and set members.
    """

    column: int = Field(ge=0)
    row: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class TerrainGrid(BaseModel):
    """Immutable elevation grid with start and goal markers (Value Object).

    The data array is copied to an owned uint8 array and made read-only at
    construction. Attempts to modify it afterwards raise ValueError.

    Invariants:
        TG-1: data is 2D and non-empty (numpy arrays are always rectangular)
        TG-2: every elevation is in [MIN_ELEVATION, MAX_ELEVATION]
        TG-3: start and goal lie within the grid
        start == goal is allowed (zero-length route).
    """

    data: NDArray[np.uint8]  # 2D array (height x width), read-only
    start: Coordinate
    goal: Coordinate

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_grid(self) -> "TerrainGrid":
        if self.data.ndim != 2:
            raise ValueError(f"Data must be 2D, got {self.data.ndim}D")
        if self.data.shape[0] == 0 or self.data.shape[1] == 0:
            raise ValueError(f"Data cannot be empty: {self.data.shape}")
        if self.data.dtype.kind not in ("i", "u"):
            raise ValueError(f"Data must hold integer elevations, got {self.data.dtype}")
        low, high = int(self.data.min()), int(self.data.max())
        if low < MIN_ELEVATION or high > MAX_ELEVATION:
            raise ValueError(
                f"Elevations must be in [{MIN_ELEVATION}, {MAX_ELEVATION}], "
                f"got [{low}, {high}]"
            )
        height, width = self.data.shape
        for name, coord in (("start", self.start), ("goal", self.goal)):
            if coord.column >= width or coord.row >= height:
                raise ValueError(
                    f"{name} (column={coord.column}, row={coord.row}) outside "
                    f"{width}x{height} grid"
                )

        # Owned, contiguous copy; never flip flags on the caller's array
        immutable = np.array(self.data, dtype=np.uint8, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "data", immutable)

        return self

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[int]],
        start: Coordinate,
        goal: Coordinate,
    ) -> "TerrainGrid":
        """Build a grid from nested rows of elevations.

        Raises:
            EmptyHeightmapError: If there are no rows or row 0 is empty
            RaggedHeightmapError: If rows have unequal widths
            ValueError: If any TerrainGrid invariant fails
        """
        if len(rows) == 0 or len(rows[0]) == 0:
            raise EmptyHeightmapError("Heightmap has no cells")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise RaggedHeightmapError(i, width, len(row))
        data = np.array(rows, dtype=np.int64)
        return cls(data=data, start=start, goal=goal)

    def width(self) -> int:
        """Return number of columns."""
        return int(self.data.shape[1])

    def height(self) -> int:
        """Return number of rows."""
        return int(self.data.shape[0])

    def contains(self, coord: Coordinate) -> bool:
        """Check if coord lies within the grid."""
        return coord.column < self.width() and coord.row < self.height()

    def elevation_at(self, coord: Coordinate) -> int:
        """Return the elevation stored at coord.

        Raises:
            CoordinateOutOfBoundsError: If coord is outside the grid
        """
        if not self.contains(coord):
            raise CoordinateOutOfBoundsError(coord, self.width(), self.height())
        return int(self.data[coord.row, coord.column])

    def neighbors(self, coord: Coordinate) -> tuple[Coordinate, ...]:
        """Return in-bounds orthogonal neighbors in order up, down, left, right.

        Edge cells yield three neighbors, corner cells two (one on a 1-wide grid).

        Raises:
            CoordinateOutOfBoundsError: If coord is outside the grid
        """
        if not self.contains(coord):
            raise CoordinateOutOfBoundsError(coord, self.width(), self.height())
        width, height = self.width(), self.height()
        result: list[Coordinate] = []
        for d_column, d_row in _ORTHOGONAL_STEPS:
            column, row = coord.column + d_column, coord.row + d_row
            if 0 <= column < width and 0 <= row < height:
                result.append(Coordinate(column=column, row=row))
        return tuple(result)

    def cells_at(self, elevation: int) -> tuple[Coordinate, ...]:
        """Return every coordinate at the given elevation, in row-major order."""
        rows, columns = np.nonzero(self.data == elevation)
        return tuple(
            Coordinate(column=int(c), row=int(r)) for r, c in zip(rows, columns)
        )
