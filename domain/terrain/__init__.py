"""Terrain Bounded Context.

Responsible for the static elevation surface:
- Value Objects: Coordinate, TerrainGrid
- Elevation codec: elevation_from_char, char_from_elevation
- Ports: HeightmapRepository
"""
