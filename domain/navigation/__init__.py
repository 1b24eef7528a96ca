"""Navigation Bounded Context.

Responsible for moving across a TerrainGrid under the climb rule:
- Value Objects: Route
- Services: can_step, find_route, shortest_path_length, find_route_from_elevation
"""
