"""Application services: the terrain-navigate command line."""
