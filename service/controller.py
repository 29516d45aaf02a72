"""Boundary between swipe input and the board core."""

import threading
from typing import Any, Dict, List, Optional, Sequence, Tuple

from board_rules import MOVES, Board, Move, MoveResult
from config import BoardConfig
from tile import TileSnapshot

DIRECTION_NAMES: Sequence[str] = ("UP", "RIGHT", "DOWN", "LEFT")
SWIPES: Dict[str, Move] = dict(zip(DIRECTION_NAMES, MOVES))
MOVE_NAMES: Dict[Move, str] = {move: name for name, move in SWIPES.items()}


def parse_swipe(name: str) -> Move:
    try:
        return SWIPES[name.strip().upper()]
    except (AttributeError, KeyError):
        raise ValueError(f"Unknown direction: {name}") from None


def tile_payload(snapshot: TileSnapshot) -> Dict[str, int]:
    return {
        "x": snapshot.position.x,
        "y": snapshot.position.y,
        "value": snapshot.value,
        "number": snapshot.number,
    }


class GameController:
    """Translates swipes into board moves and answers render queries.

    Every call holds one lock, so overlapping input events are drained one
    at a time and a query never observes a move half applied.
    """

    def __init__(self, board: Optional[Board] = None, config: Optional[BoardConfig] = None) -> None:
        self._lock = threading.RLock()
        if board is None:
            board = Board(config)
            board.build_board()
        self.board = board

    def new_game(self, config: Optional[BoardConfig] = None) -> None:
        with self._lock:
            self.board = Board(config or self.board.config)
            self.board.build_board()

    def swipe(self, name: str) -> MoveResult:
        direction, orientation = parse_swipe(name)
        with self._lock:
            return self.board.move_tile(direction, orientation)

    def play(self, name: str) -> Tuple[MoveResult, Dict[str, Any]]:
        """Swipe and snapshot the resulting state without letting another move in between."""
        with self._lock:
            result = self.swipe(name)
            return result, self.state()

    def tiles(self) -> List[TileSnapshot]:
        with self._lock:
            return self.board.live_tiles()

    def grid(self) -> List[List[int]]:
        with self._lock:
            return self.board.grid().tolist()

    def valid_moves(self) -> List[str]:
        with self._lock:
            return [MOVE_NAMES[move] for move in self.board.valid_moves()]

    def is_game_over(self) -> bool:
        with self._lock:
            return self.board.is_game_over()

    def state(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "size": self.board.dimension,
                "grid": self.grid(),
                "tiles": [tile_payload(tile) for tile in self.tiles()],
                "valid_moves": self.valid_moves(),
                "game_over": self.is_game_over(),
            }


__all__ = ["DIRECTION_NAMES", "GameController", "SWIPES", "parse_swipe", "tile_payload"]
