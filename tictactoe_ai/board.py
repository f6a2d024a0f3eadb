from enum import Enum

from .errors import CellOccupied, InvalidIndex

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# every winning line, rows then columns then diagonals
# order matters: callers report the first match
LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Sign(Enum):
    """
    cell occupancy / player mark
    """
    EMPTY = ""
    X = "X"
    O = "O"

    def opposite(self):
        """
        X <-> O, EMPTY stays EMPTY
        """
        if self is Sign.X:
            return Sign.O
        if self is Sign.O:
            return Sign.X
        return Sign.EMPTY


_PARSE_MAP = {"X": Sign.X, "O": Sign.O, "_": Sign.EMPTY, ".": Sign.EMPTY, " ": Sign.EMPTY}


class Board:
    """
    3x3 grid addressed by index 0..8, row by row:

        [0][1][2]
        [3][4][5]
        [6][7][8]
    """
    def __init__(self):
        self.cells = [Sign.EMPTY] * CELL_COUNT

    @classmethod
    def parse(cls, text):
        """
        build a board from 9 chars of X, O and _ (or . / space for empty);
        newlines are ignored so a 3-line layout works too
        """
        chars = [ch for ch in text.upper() if ch != "\n"]
        if len(chars) != CELL_COUNT:
            raise ValueError(f"expected {CELL_COUNT} cells, got {len(chars)}")
        board = cls()
        for i, ch in enumerate(chars):
            try:
                board.cells[i] = _PARSE_MAP[ch]
            except KeyError:
                raise ValueError(f"unknown cell marker {ch!r}") from None
        return board

    @staticmethod
    def is_valid_index(index):
        # bool is an int subclass, reject it anyway
        return (isinstance(index, int) and not isinstance(index, bool)
                and 0 <= index < CELL_COUNT)

    def _check_index(self, index):
        if not self.is_valid_index(index):
            raise InvalidIndex(index)

    def get_cell(self, index):
        self._check_index(index)
        return self.cells[index]

    def is_empty(self, index):
        return self.get_cell(index) is Sign.EMPTY

    def set_cell(self, index, sign):
        """
        place sign, guarding range and occupancy
        """
        self._check_index(index)
        if sign is Sign.EMPTY:
            raise ValueError("cannot place an empty sign, use reset()")
        current = self.cells[index]
        if current is not Sign.EMPTY:
            raise CellOccupied(index, current)
        self.cells[index] = sign

    def reset(self):
        self.cells = [Sign.EMPTY] * CELL_COUNT

    def empty_cells(self):
        return [i for i, sign in enumerate(self.cells) if sign is Sign.EMPTY]

    def filled_count(self):
        return CELL_COUNT - len(self.empty_cells())

    def is_full(self):
        return not self.empty_cells()

    def __iter__(self):
        return iter(self.cells)

    def __str__(self):
        rows = []
        for r in range(BOARD_SIZE):
            row = self.cells[r * BOARD_SIZE:(r + 1) * BOARD_SIZE]
            rows.append(" | ".join(sign.value or " " for sign in row))
        return "\n---------\n".join(rows)


def winning_line(board, sign):
    """
    first line fully owned by sign, or None
    """
    if sign is Sign.EMPTY:
        return None
    for line in LINES:
        if all(board.cells[i] is sign for i in line):
            return line
    return None
