"""Core board mechanics: sliding, merging, spawning and the terminal check."""

import copy
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from config import BoardConfig
from geometry import Direction, Orientation, Position
from tile import Tile, TileSnapshot

logger = logging.getLogger(__name__)

Move = Tuple[Direction, Orientation]

# Ordered UP, RIGHT, DOWN, LEFT; y grows downwards.
MOVES: Sequence[Move] = (
    (Direction.BACKWARD, Orientation.VERTICAL),
    (Direction.FORWARD, Orientation.HORIZONTAL),
    (Direction.FORWARD, Orientation.VERTICAL),
    (Direction.BACKWARD, Orientation.HORIZONTAL),
)


class SpawnStatus(Enum):
    SPAWNED = "spawned"
    BOARD_FULL = "board_full"


@dataclass(frozen=True)
class SpawnResult:
    status: SpawnStatus
    tile: Optional[TileSnapshot] = None

    @property
    def board_full(self) -> bool:
        return self.status is SpawnStatus.BOARD_FULL


@dataclass(frozen=True)
class MoveResult:
    moved: bool
    spawn: Optional[SpawnResult]
    game_over: bool


class Board:
    """Owns the live tiles of one square grid.

    Tiles are mutated in place by moves; callers only ever see
    :class:`TileSnapshot` values through :meth:`live_tiles` and
    :meth:`grid`. A board is not reentrant: each call runs to completion
    before the next may start.
    """

    def __init__(self, config: Optional[BoardConfig] = None, rng: Optional[np.random.Generator] = None) -> None:
        self.config = config or BoardConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self._tiles: List[Tile] = []

    @classmethod
    def from_grid(
        cls,
        grid: Sequence[Sequence[int]],
        config: Optional[BoardConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "Board":
        """Build a board from displayed numbers (0 for empty), indexed ``[y][x]``."""
        raw = np.asarray(grid)
        if raw.dtype.kind not in "iuf":
            raise ValueError(f"Expected a numeric grid, received dtype {raw.dtype}")
        if raw.dtype.kind == "f" and not np.array_equal(raw, np.floor(raw)):
            raise ValueError("Tile numbers must be whole numbers")
        arr = raw.astype(np.int64)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError(f"Expected square grid, received shape {arr.shape}")
        if config is None:
            config = BoardConfig(dimension=arr.shape[0])
        elif config.dimension != arr.shape[0]:
            raise ValueError(f"Grid shape {arr.shape} does not match dimension {config.dimension}")

        board = cls(config, rng)
        for y, x in zip(*np.nonzero(arr)):
            number = int(arr[y, x])
            if number < 2 or number & (number - 1):
                raise ValueError(f"Tile numbers must be powers of two >= 2, got {number}")
            board.add(Tile(number.bit_length() - 1, Position(int(x), int(y))))
        return board

    @property
    def dimension(self) -> int:
        return self.config.dimension

    def __len__(self) -> int:
        return len(self._tiles)

    def copy(self) -> "Board":
        """Independent board; the clone draws from a copy of this board's generator."""
        clone = Board(self.config, copy.deepcopy(self.rng))
        clone._tiles = [Tile(tile.value, tile.position) for tile in self._tiles]
        return clone

    def add(self, tile: Tile) -> None:
        if tile.value < 1:
            raise ValueError(f"Live tiles need a value >= 1, got {tile.value}")
        if not tile.position.in_bounds(self.dimension):
            raise ValueError(f"Position {tile.position} is outside a {self.dimension}x{self.dimension} board")
        if any(other.position == tile.position for other in self._tiles):
            raise ValueError(f"Position {tile.position} is already occupied")
        self._tiles.append(tile)

    def _remove(self, tile: Tile) -> None:
        self._tiles.remove(tile)

    def build_board(self) -> None:
        self._tiles = []
        for _ in range(self.config.initial_tiles):
            self.generate_tile()

    # -- queries --------------------------------------------------------------

    def live_tiles(self) -> List[TileSnapshot]:
        return sorted(
            (tile.snapshot() for tile in self._tiles),
            key=lambda snap: (snap.position.y, snap.position.x),
        )

    def grid(self, exponents: bool = False) -> np.ndarray:
        n = self.dimension
        grid = np.zeros((n, n), dtype=int)
        for tile in self._tiles:
            grid[tile.position.y, tile.position.x] = tile.value if exponents else tile.number
        return grid

    def empty_positions(self) -> List[Position]:
        n = self.dimension
        occupied = {tile.position for tile in self._tiles}
        return [Position(x, y) for y in range(n) for x in range(n) if Position(x, y) not in occupied]

    def is_full(self) -> bool:
        return len(self._tiles) >= self.config.capacity

    def can_move(self) -> bool:
        """True while an empty cell or two equal orthogonal neighbours exist."""
        grid = self.grid(exponents=True)
        if not grid.all():
            return True
        return bool((grid[:, 1:] == grid[:, :-1]).any() or (grid[1:, :] == grid[:-1, :]).any())

    def is_game_over(self) -> bool:
        return not self.can_move()

    def valid_moves(self) -> List[Move]:
        return [move for move in MOVES if self.copy().check_movement(*move)]

    # -- mutation -------------------------------------------------------------

    def _cells(self) -> List[Optional[Tile]]:
        cells: List[Optional[Tile]] = [None] * self.config.capacity
        for tile in self._tiles:
            cells[tile.position.index(self.dimension)] = tile
        return cells

    def check_movement(self, direction: Direction, orientation: Orientation) -> bool:
        """Slide and merge every line once; return whether any tile changed.

        Each line is walked starting from the destination edge. ``last_empty``
        is the open slot nearest that edge and ``last_mergeable`` the nearest
        tile that has not merged yet. A merged tile is never mergeable again
        in the same pass.
        """
        n = self.dimension
        cells = self._cells()
        moved = False

        for i in range(n):
            last_empty: Optional[Position] = None
            last_mergeable: Optional[Tile] = None
            for j in range(n):
                along = (n - 1) - j if direction is Direction.FORWARD else j
                if orientation is Orientation.HORIZONTAL:
                    position = Position(along, i)
                else:
                    position = Position(i, along)
                tile = cells[position.index(n)]

                if tile is None:
                    if last_empty is None:
                        last_empty = position
                    continue

                if last_mergeable is not None and last_mergeable.value == tile.value:
                    self._remove(tile)
                    last_mergeable.merge_to(last_mergeable.position)
                    last_empty = last_mergeable.position.previous_position(direction, orientation)
                    last_mergeable = None
                    moved = True
                    continue

                if last_empty is not None:
                    tile.move_to(last_empty)
                    last_empty = tile.position.previous_position(direction, orientation)
                    moved = True
                last_mergeable = tile

        return moved

    def generate_tile(self) -> SpawnResult:
        remain = self.empty_positions()
        if not remain:
            logger.info("No space available for a new tile")
            self.game_over()
            return SpawnResult(SpawnStatus.BOARD_FULL)

        position = remain[int(self.rng.integers(len(remain)))]
        choices = self.config.spawn_values
        value = choices[int(self.rng.integers(len(choices)))]
        tile = Tile(value, position)
        self._tiles.append(tile)
        return SpawnResult(SpawnStatus.SPAWNED, tile.snapshot())

    def game_over(self) -> bool:
        over = self.is_game_over()
        if over:
            logger.info("Game over with %d tiles, highest %d", len(self._tiles), int(self.grid().max()))
        return over

    def move_tile(self, direction: Direction, orientation: Orientation) -> MoveResult:
        moved = self.check_movement(direction, orientation)
        spawn = self.generate_tile() if moved else None
        logger.debug("move %s/%s moved=%s", direction.name, orientation.name, moved)
        return MoveResult(moved, spawn, self.is_game_over())


__all__ = ["Board", "MOVES", "Move", "MoveResult", "SpawnResult", "SpawnStatus"]
