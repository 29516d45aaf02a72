"""Tests for swipe translation and the render queries."""

import threading
import unittest
from unittest.mock import patch

from board_rules import Board
from config import BoardConfig
from controller import DIRECTION_NAMES, GameController, parse_swipe
from geometry import Direction, Orientation


class ParseSwipeTests(unittest.TestCase):
    def test_swipes_map_to_direction_and_orientation(self) -> None:
        self.assertEqual(parse_swipe("RIGHT"), (Direction.FORWARD, Orientation.HORIZONTAL))
        self.assertEqual(parse_swipe("LEFT"), (Direction.BACKWARD, Orientation.HORIZONTAL))
        self.assertEqual(parse_swipe("UP"), (Direction.BACKWARD, Orientation.VERTICAL))
        self.assertEqual(parse_swipe("DOWN"), (Direction.FORWARD, Orientation.VERTICAL))

    def test_names_are_case_insensitive(self) -> None:
        self.assertEqual(parse_swipe(" down "), parse_swipe("DOWN"))

    def test_unknown_direction_raises(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown direction"):
            parse_swipe("DIAGONAL")
        with self.assertRaises(ValueError):
            parse_swipe(None)  # type: ignore[arg-type]


class GameControllerTests(unittest.TestCase):
    def test_new_controller_starts_with_two_tiles(self) -> None:
        controller = GameController(config=BoardConfig(seed=5))

        self.assertEqual(len(controller.tiles()), 2)
        self.assertFalse(controller.is_game_over())

    def test_swipe_forwards_to_board(self) -> None:
        board = Board.from_grid([[2, 0, 0, 0]] + [[0] * 4] * 3)
        controller = GameController(board=board)

        with patch.object(board, "move_tile", wraps=board.move_tile) as move_tile:
            result = controller.swipe("right")

        move_tile.assert_called_once_with(Direction.FORWARD, Orientation.HORIZONTAL)
        self.assertTrue(result.moved)
        self.assertEqual(controller.grid()[0][3], 2)

    def test_state_exposes_render_data(self) -> None:
        board = Board.from_grid([[2, 0], [0, 4]])
        controller = GameController(board=board)

        state = controller.state()

        self.assertEqual(state["size"], 2)
        self.assertEqual(state["grid"], [[2, 0], [0, 4]])
        self.assertEqual(
            state["tiles"],
            [
                {"x": 0, "y": 0, "value": 1, "number": 2},
                {"x": 1, "y": 1, "value": 2, "number": 4},
            ],
        )
        self.assertEqual(state["valid_moves"], ["UP", "RIGHT", "DOWN", "LEFT"])
        self.assertFalse(state["game_over"])

    def test_new_game_resets_board(self) -> None:
        board = Board.from_grid([[2, 4], [8, 16]])
        controller = GameController(board=board)
        self.assertTrue(controller.is_game_over())

        controller.new_game(BoardConfig(dimension=3, seed=9))

        self.assertIsNot(controller.board, board)
        self.assertEqual(controller.board.dimension, 3)
        self.assertEqual(len(controller.tiles()), 2)

    def test_play_returns_state_of_its_own_move(self) -> None:
        board = Board.from_grid([[2, 2, 0, 0]] + [[0] * 4] * 3)
        controller = GameController(board=board)

        result, state = controller.play("LEFT")

        self.assertTrue(result.moved)
        self.assertEqual(state["grid"], controller.grid())
        self.assertEqual(state["grid"][0][0], 4)
        self.assertEqual(len(state["tiles"]), 2)

    def test_concurrent_swipes_and_reads_see_whole_moves(self) -> None:
        controller = GameController(config=BoardConfig(seed=77))
        problems = []

        def play() -> None:
            for step in range(300):
                controller.swipe(DIRECTION_NAMES[step % 4])

        def watch() -> None:
            for _ in range(300):
                state = controller.state()
                numbers = [tile["number"] for tile in state["tiles"]]
                cells = [value for row in state["grid"] for value in row if value]
                positions = {(tile["x"], tile["y"]) for tile in state["tiles"]}
                if sorted(numbers) != sorted(cells) or len(positions) != len(numbers):
                    problems.append(state)

        threads = [threading.Thread(target=play), threading.Thread(target=watch)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(problems, [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
