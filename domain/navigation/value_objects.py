"""Navigation Bounded Context - Value Objects.

See domain/navigation/services.py for how routes are produced.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.terrain.value_objects import Coordinate


class Route(BaseModel):
    """Shortest start-to-goal path over a TerrainGrid (Value Object).

    Invariants:
        R-1: len(path) >= 1 (a single cell when start == goal)
        R-2: consecutive coordinates are orthogonally adjacent

    The climb rule is not re-checked here since it needs the grid; routes are
    only built by the navigation services, which enforce it on every step.
    """

    path: tuple[Coordinate, ...] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_adjacency(self) -> "Route":
        for i in range(1, len(self.path)):
            prev, curr = self.path[i - 1], self.path[i]
            if abs(prev.column - curr.column) + abs(prev.row - curr.row) != 1:
                raise ValueError(
                    f"Path entries {i - 1} and {i} are not adjacent: "
                    f"({prev.column}, {prev.row}) -> ({curr.column}, {curr.row})"
                )
        return self

    @property
    def steps(self) -> int:
        """Number of moves along the route."""
        return len(self.path) - 1

    @property
    def start(self) -> Coordinate:
        return self.path[0]

    @property
    def goal(self) -> Coordinate:
        return self.path[-1]
