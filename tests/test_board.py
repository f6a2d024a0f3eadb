import unittest

from tictactoe_ai.board import LINES, Board, Sign, winning_line
from tictactoe_ai.errors import CellOccupied, GameError, InvalidIndex


class TestBoard(unittest.TestCase):
    def setUp(self) -> None:
        self.board = Board()

    def test_new_board_is_empty(self) -> None:
        self.assertEqual(self.board.empty_cells(), list(range(9)))
        self.assertEqual(self.board.filled_count(), 0)
        self.assertFalse(self.board.is_full())

    def test_set_and_get_cell(self) -> None:
        self.board.set_cell(4, Sign.X)
        self.assertIs(self.board.get_cell(4), Sign.X)
        self.assertFalse(self.board.is_empty(4))
        self.assertTrue(self.board.is_empty(0))
        self.assertEqual(self.board.filled_count(), 1)

    def test_invalid_index_rejected(self) -> None:
        for bad in (-1, 9, 42, "4", None, True, 1.0):
            with self.subTest(index=bad):
                with self.assertRaises(InvalidIndex):
                    self.board.set_cell(bad, Sign.X)
                with self.assertRaises(InvalidIndex):
                    self.board.get_cell(bad)
        self.assertEqual(self.board.filled_count(), 0)

    def test_invalid_index_is_a_game_error_and_index_error(self) -> None:
        with self.assertRaises(GameError):
            self.board.is_empty(9)
        with self.assertRaises(IndexError):
            self.board.is_empty(9)

    def test_is_valid_index(self) -> None:
        self.assertTrue(all(Board.is_valid_index(i) for i in range(9)))
        for bad in (-1, 9, 2**40, -2**63, True, False, "0", 0.0):
            with self.subTest(index=bad):
                self.assertFalse(Board.is_valid_index(bad))

    def test_occupied_cell_keeps_first_sign(self) -> None:
        self.board.set_cell(0, Sign.O)
        with self.assertRaises(CellOccupied) as ctx:
            self.board.set_cell(0, Sign.X)
        self.assertIs(ctx.exception.sign, Sign.O)
        self.assertIs(self.board.get_cell(0), Sign.O)

    def test_cannot_place_empty(self) -> None:
        with self.assertRaises(ValueError):
            self.board.set_cell(0, Sign.EMPTY)

    def test_reset_clears_every_cell(self) -> None:
        board = Board.parse("XOXOXOXOX")
        self.assertTrue(board.is_full())
        board.reset()
        self.assertEqual(board.filled_count(), 0)

    def test_parse_accepts_rows_and_placeholders(self) -> None:
        board = Board.parse("x._\n O \n__o")
        self.assertEqual(
            list(board),
            [Sign.X, Sign.EMPTY, Sign.EMPTY,
             Sign.EMPTY, Sign.O, Sign.EMPTY,
             Sign.EMPTY, Sign.EMPTY, Sign.O],
        )

    def test_parse_rejects_bad_input(self) -> None:
        with self.assertRaises(ValueError):
            Board.parse("XOX")
        with self.assertRaises(ValueError):
            Board.parse("XOX?_____")

    def test_str_renders_three_rows(self) -> None:
        text = str(Board.parse("X___O___X"))
        self.assertEqual(text.splitlines()[0], "X |   |  ")
        self.assertEqual(len(text.splitlines()), 5)


class TestLines(unittest.TestCase):
    def test_eight_fixed_lines_in_order(self) -> None:
        self.assertEqual(len(LINES), 8)
        self.assertEqual(LINES[0], (0, 1, 2))
        self.assertEqual(LINES[3], (0, 3, 6))
        self.assertEqual(LINES[6], (0, 4, 8))
        self.assertEqual(LINES[7], (2, 4, 6))

    def test_winning_line_reports_first_match(self) -> None:
        board = Board.parse("XXXX__X__")
        self.assertEqual(winning_line(board, Sign.X), (0, 1, 2))
        self.assertIsNone(winning_line(board, Sign.O))

    def test_winning_line_each_line(self) -> None:
        for line in LINES:
            board = Board()
            for i in line:
                board.set_cell(i, Sign.O)
            with self.subTest(line=line):
                self.assertEqual(winning_line(board, Sign.O), line)

    def test_empty_never_wins(self) -> None:
        self.assertIsNone(winning_line(Board(), Sign.EMPTY))

    def test_sign_opposite(self) -> None:
        self.assertIs(Sign.X.opposite(), Sign.O)
        self.assertIs(Sign.O.opposite(), Sign.X)
        self.assertIs(Sign.EMPTY.opposite(), Sign.EMPTY)


if __name__ == "__main__":
    unittest.main()
