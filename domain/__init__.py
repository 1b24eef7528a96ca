"""Terrain Navigator Domain Layer.

This package contains the core logic organized by bounded contexts:
- terrain: Elevation grid, coordinates, heightmap errors and ports
- navigation: Climb rule, breadth-first route search
"""

# Imports alphabetized per project style (isort)
from domain import navigation, terrain

__all__ = ["navigation", "terrain"]
