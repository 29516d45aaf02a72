"""Tile entity: an exponent value sitting at a board position."""

from typing import NamedTuple

from geometry import Direction, Orientation, Position


class TileSnapshot(NamedTuple):
    """Read-only view of a live tile handed to the presentation layer."""

    value: int
    position: Position

    @property
    def number(self) -> int:
        return 1 << self.value if self.value else 0


class Tile:
    """One cell's worth of state.

    ``value`` is the exponent (the tile shows ``2 ** value``); 0 marks a
    scratch empty tile that never lives on the board. Equality is structural
    so a consumed tile can be located in the live list after a merge.
    """

    def __init__(self, value: int, position: Position = Position(0, 0)) -> None:
        self.value = value
        self.position = position

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.value == other.value and self.position == other.position

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Tile(value={self.value}, position=({self.position.x}, {self.position.y}))"

    @property
    def number(self) -> int:
        return 1 << self.value if self.value else 0

    @property
    def is_empty(self) -> bool:
        return self.value == 0

    def move_to(self, position: Position) -> None:
        self.position = position

    def merge_to(self, position: Position) -> None:
        self.move_to(position)
        self.value += 1

    def create_previous_empty_tile(self, direction: Direction, orientation: Orientation) -> "Tile":
        return Tile(0, self.position.previous_position(direction, orientation))

    def snapshot(self) -> TileSnapshot:
        return TileSnapshot(self.value, self.position)


__all__ = ["Tile", "TileSnapshot"]
