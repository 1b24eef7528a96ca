"""Domain Port(s) for Heightmap I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .value_objects import TerrainGrid


class HeightmapRepository(Protocol):
    """Port for obtaining terrain grids from external sources.

    Implementations live in infrastructure (e.g., text heightmap adapter).
    """

    def load_heightmap(self, file_path: Path | str) -> TerrainGrid:
        """Load a heightmap and return a validated TerrainGrid."""
        ...
