"""Terrain Bounded Context - Error Hierarchy.

Custom exceptions for heightmap construction and grid lookups.

Structural errors (InvalidHeightmapError and subclasses) are raised once, when
a heightmap is parsed or loaded. An unreachable goal is NOT an error: the
navigation services report it as ``None``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domain.terrain.value_objects import Coordinate


class TerrainError(Exception):
    """Base error for terrain operations."""


# ---------------------------------------------------------------------------
# Structural Errors (heightmap construction)
# ---------------------------------------------------------------------------
class InvalidHeightmapError(TerrainError):
    """Heightmap input is malformed or inconsistent."""


class EmptyHeightmapError(InvalidHeightmapError):
    """Heightmap has no rows (or only blank rows)."""


class RaggedHeightmapError(InvalidHeightmapError):
    """Heightmap rows have unequal widths.

    Attributes:
        row: Index of the first row whose width differs from row 0
        expected: Width of row 0
        actual: Width of the offending row
    """

    def __init__(self, row: int, expected: int, actual: int) -> None:
        self.row = row
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Row {row} has width {actual}, expected {expected} (grid must be rectangular)"
        )


class InvalidElevationError(InvalidHeightmapError):
    """Character or value does not encode an elevation."""


class MissingMarkerError(InvalidHeightmapError):
    """Start or goal marker is absent."""


class DuplicateMarkerError(InvalidHeightmapError):
    """Start or goal marker appears more than once."""


# ---------------------------------------------------------------------------
# Lookup Errors
# ---------------------------------------------------------------------------
class CoordinateOutOfBoundsError(TerrainError):
    """Coordinate is outside the terrain grid bounds.

    Raised by bounded lookups on a validated grid; reaching it means a caller
    broke the lookup contract.

    Attributes:
        coord: The offending Coordinate
        width: The grid's width (columns)
        height: The grid's height (rows)
    """

    def __init__(self, coord: "Coordinate", width: int, height: int) -> None:
        self.coord = coord
        self.width = width
        self.height = height
        super().__init__(
            f"Coordinate (column={coord.column}, row={coord.row}) outside grid "
            f"[columns: 0 to {width - 1}, rows: 0 to {height - 1}]"
        )


class GridTooLargeError(TerrainError):
    """Heightmap exceeds the configured cell budget."""
