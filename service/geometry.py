"""Grid coordinates and the move vocabulary shared by tiles and the board."""

from dataclasses import dataclass
from enum import Enum


class Orientation(Enum):
    """Axis a move scans along: columns for vertical, rows for horizontal."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Direction(Enum):
    """Scan polarity relative to increasing coordinate."""

    FORWARD = 1
    BACKWARD = -1


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def previous_position(self, direction: Direction, orientation: Orientation) -> "Position":
        """Cell one step against ``direction`` on the ``orientation`` axis."""
        if orientation is Orientation.VERTICAL:
            return Position(self.x, self.y - direction.value)
        return Position(self.x - direction.value, self.y)

    def index(self, dimension: int) -> int:
        return self.x + self.y * dimension

    def in_bounds(self, dimension: int) -> bool:
        return 0 <= self.x < dimension and 0 <= self.y < dimension


__all__ = ["Direction", "Orientation", "Position"]
