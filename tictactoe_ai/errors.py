"""
rejections raised by the board and the game engine
"""

# reasons carried by IllegalMove
GAME_OVER = "game over"
WRONG_TURN = "not your turn"
CELL_OCCUPIED = "cell taken"


class GameError(Exception):
    """
    base for every rejected command
    """


class InvalidIndex(GameError, IndexError):
    def __init__(self, index):
        super().__init__(f"invalid cell index {index!r}, must be 0-8")
        self.index = index


class CellOccupied(GameError):
    def __init__(self, index, sign):
        super().__init__(f"cell {index} is already taken by {sign.value}")
        self.index = index
        self.sign = sign


class IllegalMove(GameError):
    """
    move refused by the engine: game over, wrong turn or occupied cell
    """
    def __init__(self, reason, index=None):
        super().__init__(reason)
        self.reason = reason
        self.index = index
