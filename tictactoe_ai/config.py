"""
Game configuration.

Defaults live on the dataclass; ``GameConfig.from_env`` lets the launcher
(or a test) override the starting sign and the AI delay without code changes:

    TICTACTOE_STARTING_SIGN=O TICTACTOE_AI_DELAY=0.25 python main.py
"""

import os
from dataclasses import dataclass

from .board import Sign

ENV_STARTING_SIGN = "TICTACTOE_STARTING_SIGN"
ENV_AI_DELAY = "TICTACTOE_AI_DELAY"


def parse_sign(value):
    """
    'x' / 'X' / 'o' / 'O' -> Sign
    """
    text = str(value).strip().upper()
    if text == "X":
        return Sign.X
    if text == "O":
        return Sign.O
    raise ValueError(f"starting sign must be X or O, got {value!r}")


def parse_delay(value):
    try:
        delay = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"ai delay must be a number of seconds, got {value!r}") from None
    if delay < 0:
        raise ValueError(f"ai delay cannot be negative, got {delay}")
    return delay


@dataclass(frozen=True)
class GameConfig:
    """
    settings supplied by the presentation layer
    """
    starting_sign: Sign = Sign.X     # who moves first every round
    ai_move_delay: float = 1.0       # seconds the AI "thinks"
    player1_default: str = "Player 1"
    player2_default: str = "Player 2"
    ai_name: str = "AI Player"
    ai_win_text: str = "AI WINS!"
    draw_text: str = "DRAW"

    def __post_init__(self):
        if self.starting_sign is Sign.EMPTY:
            raise ValueError("starting sign must be X or O")
        parse_delay(self.ai_move_delay)

    @classmethod
    def from_env(cls, environ=None, **overrides):
        """
        defaults <- environment <- explicit overrides (None values skipped)
        """
        environ = os.environ if environ is None else environ
        values = {}
        if environ.get(ENV_STARTING_SIGN):
            values["starting_sign"] = parse_sign(environ[ENV_STARTING_SIGN])
        if environ.get(ENV_AI_DELAY):
            values["ai_move_delay"] = parse_delay(environ[ENV_AI_DELAY])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
