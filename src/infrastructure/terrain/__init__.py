"""Infrastructure adapters for the terrain bounded context.

This module provides the infrastructure layer implementations for terrain
operations: loading, parsing and formatting text heightmaps.

Adapter exported for simplified imports.
"""

from .heightmap_adapter import TextHeightmapAdapter, format_heightmap, parse_heightmap

__all__ = ["TextHeightmapAdapter", "format_heightmap", "parse_heightmap"]
