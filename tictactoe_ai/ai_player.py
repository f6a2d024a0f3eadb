"""
Rule-based AI opponent.

One heuristic tier, tried in strict order, first match wins:

1. complete a line for the AI (win)
2. complete a line for the human (block)
3. take the center
4. take a corner, in order 0, 2, 6, 8
5. take an edge, in order 1, 3, 5, 7
"""

import logging

from .board import LINES, Sign

logger = logging.getLogger(__name__)

CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)


def find_winning_move(board, sign):
    """
    Find the empty cell that would give ``sign`` three in a line.

    Scans the lines in order; a line qualifies when it holds two of
    ``sign`` and one empty cell.

    Returns:
        cell index, or None if no line qualifies.
    """
    for line in LINES:
        count = 0
        empty_index = None
        for i in line:
            cell = board.cells[i]
            if cell is sign:
                count += 1
            elif cell is Sign.EMPTY:
                empty_index = i
        if count == 2 and empty_index is not None:
            return empty_index
    return None


def select_ai_move(board, ai_sign, human_sign):
    """
    Pick the AI's next cell.

    Args:
        board: current Board.
        ai_sign: sign the AI plays.
        human_sign: sign of its opponent.

    Returns:
        cell index, or None only when the board is full.
    """
    move = find_winning_move(board, ai_sign)
    if move is not None:
        logger.debug("ai %s takes the win at %d", ai_sign.value, move)
        return move

    move = find_winning_move(board, human_sign)
    if move is not None:
        logger.debug("ai %s blocks %s at %d", ai_sign.value, human_sign.value, move)
        return move

    for index in (CENTER,) + CORNERS + EDGES:
        if board.cells[index] is Sign.EMPTY:
            return index

    return None
