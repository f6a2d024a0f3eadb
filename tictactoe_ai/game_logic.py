import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from .ai_player import select_ai_move
from .board import CELL_COUNT, Board, Sign, winning_line
from .config import GameConfig
from .errors import CELL_OCCUPIED, GAME_OVER, WRONG_TURN, IllegalMove, InvalidIndex

logger = logging.getLogger(__name__)

DEFAULT_AI_SIGN = Sign.O
DEFAULT_HUMAN_SIGN = Sign.X


class PhaseKind(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class Phase:
    """
    round status: in progress, won by a sign, or draw
    """
    kind: PhaseKind
    winner: Optional[Sign] = None

    @classmethod
    def won(cls, sign):
        return cls(PhaseKind.WON, sign)

    @property
    def is_over(self):
        return self.kind is not PhaseKind.IN_PROGRESS

    def __str__(self):
        if self.kind is PhaseKind.WON:
            return f"won({self.winner.value})"
        return self.kind.value


IN_PROGRESS = Phase(PhaseKind.IN_PROGRESS)
DRAW = Phase(PhaseKind.DRAW)


@dataclass
class GameState:
    current_turn: Sign = Sign.X
    move_count: int = 0                 # 0..9, one per accepted move
    ai_sign: Sign = DEFAULT_AI_SIGN
    human_sign: Sign = DEFAULT_HUMAN_SIGN
    phase: Phase = IN_PROGRESS
    winning_line: Optional[Tuple[int, int, int]] = None


@dataclass
class PlayerIdentity:
    name: str = ""
    sign: Sign = Sign.X


class GameEngine(QObject):
    """
    tic-tac-toe rules, turn state and the delayed AI move

    slot 1 plays state.human_sign and slot 2 plays state.ai_sign; without
    ai those stay X and O, in ai mode slot 2 is the ai and the two signs
    flip on every rematch
    """
    turn_changed = Signal(object)         # new Sign to move
    move_applied = Signal(int, object)    # index, Sign
    move_rejected = Signal(int, str)      # index, reason
    game_ended = Signal(object, str)      # Phase, display text
    round_started = Signal()

    def __init__(self, config=None, parent=None):
        """
        init board, state, players and the ai timer
        """
        super().__init__(parent)
        self.config = config or GameConfig()
        self.board = Board()
        self.state = GameState(current_turn=self.config.starting_sign)
        self.players = (PlayerIdentity("", Sign.X), PlayerIdentity("", Sign.O))
        self.ai_enabled = False
        self.ai_thinking = False          # one pending ai move at most
        self._ai_timer = QTimer(self)
        self._ai_timer.setSingleShot(True)
        self._ai_timer.timeout.connect(self._play_ai_move)

    # ------------------------------------------------------------------
    # commands
    # ------------------------------------------------------------------

    def apply_move(self, index, sign):
        """
        place sign at index for the player whose turn it is

        raises IllegalMove (game over, wrong turn, cell taken) or
        InvalidIndex; a rejected move changes nothing
        """
        if self.state.phase.is_over:
            self._reject(index, GAME_OVER)
        if sign is not self.state.current_turn:
            self._reject(index, WRONG_TURN)
        try:
            empty = self.board.is_empty(index)
        except InvalidIndex as exc:
            logger.debug("rejected move at %r: %s", index, exc)
            self.move_rejected.emit(-1, str(exc))
            raise
        if not empty:
            self._reject(index, CELL_OCCUPIED)

        self.board.set_cell(index, sign)
        self.state.move_count += 1
        logger.debug("%s plays %d (move %d)", sign.value, index, self.state.move_count)
        self.move_applied.emit(index, sign)
        self._end_turn()

    def rematch(self):
        """
        new round; in ai mode the ai and the human trade signs
        """
        if self.ai_enabled:
            self._swap_signs()
        # without ai the signs stay put, slot 1 keeps X
        self._start_round()

    def set_mode(self, ai_enabled):
        """
        switch between player vs player and player vs ai
        """
        self.ai_enabled = bool(ai_enabled)
        self._set_signs(DEFAULT_AI_SIGN, DEFAULT_HUMAN_SIGN)
        logger.info("mode set to %s", "player vs ai" if self.ai_enabled else "player vs player")
        self._start_round()

    def full_reset(self):
        """
        back to the pre-game configuration (leaving to the menu)
        """
        self.ai_enabled = False
        self._set_signs(DEFAULT_AI_SIGN, DEFAULT_HUMAN_SIGN)
        self._start_round()

    def set_player_name(self, slot, name):
        self._player(slot).name = name or ""

    def cancel_ai_move(self):
        if self._ai_timer.isActive() or self.ai_thinking:
            logger.debug("pending ai move cancelled")
        self._ai_timer.stop()
        self.ai_thinking = False

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def get_current_turn(self):
        return self.state.current_turn

    def get_phase(self):
        return self.state.phase

    def get_cell_state(self, index):
        return self.board.get_cell(index)

    def is_current_turn_ai(self):
        return self.ai_enabled and self.state.current_turn is self.state.ai_sign

    def slot_sign(self, slot):
        return self._player(slot).sign

    def slot_of(self, sign):
        """
        slot (1 or 2) of the player holding sign
        """
        return 1 if sign is self.state.human_sign else 2

    def active_slot(self):
        return self.slot_of(self.state.current_turn)

    def display_name(self, sign):
        """
        name shown for the player holding sign
        """
        slot = self.slot_of(sign)
        if self.ai_enabled and slot == 2:
            return self.config.ai_name
        default = self.config.player1_default if slot == 1 else self.config.player2_default
        return self._player(slot).name.strip() or default

    def result_text(self):
        """
        winner text for a finished round, empty while in progress
        """
        phase = self.state.phase
        if phase.kind is PhaseKind.DRAW:
            return self.config.draw_text
        if phase.kind is PhaseKind.WON:
            if self.ai_enabled and phase.winner is self.state.ai_sign:
                return self.config.ai_win_text
            return self.display_name(phase.winner)
        return ""

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _player(self, slot):
        if slot not in (1, 2):
            raise ValueError(f"player slot must be 1 or 2, got {slot!r}")
        return self.players[slot - 1]

    def _reject(self, index, reason):
        logger.debug("rejected move at %r: %s", index, reason)
        self.move_rejected.emit(index if Board.is_valid_index(index) else -1, reason)
        raise IllegalMove(reason, index)

    def _end_turn(self):
        """
        check the 8 lines for the mover, then the draw, else pass the turn
        """
        turn = self.state.current_turn
        line = winning_line(self.board, turn)
        if line is not None:
            self.state.winning_line = line
            self._game_over(Phase.won(turn))
        elif self.state.move_count >= CELL_COUNT:
            self._game_over(DRAW)
        else:
            self._change_turn()

    def _change_turn(self):
        self.state.current_turn = self.state.current_turn.opposite()
        self.turn_changed.emit(self.state.current_turn)
        self._schedule_ai_move()

    def _game_over(self, phase):
        self.state.phase = phase
        text = self.result_text()
        logger.info("round over: %s (%s)", phase, text)
        self.game_ended.emit(phase, text)

    def _set_signs(self, ai_sign, human_sign):
        self.state.ai_sign = ai_sign
        self.state.human_sign = human_sign
        self.players[0].sign = human_sign
        self.players[1].sign = ai_sign

    def _swap_signs(self):
        state = self.state
        self._set_signs(state.human_sign, state.ai_sign)
        logger.info("signs swapped: ai plays %s, human plays %s",
                    state.ai_sign.value, state.human_sign.value)

    def _start_round(self):
        # clear board + flags, stop any pending ai move
        self.cancel_ai_move()
        self.board.reset()
        self.state.move_count = 0
        self.state.phase = IN_PROGRESS
        self.state.winning_line = None
        self.state.current_turn = self.config.starting_sign
        self.round_started.emit()
        self.turn_changed.emit(self.state.current_turn)
        self._schedule_ai_move()

    def _schedule_ai_move(self):
        if not self.is_current_turn_ai() or self.state.phase.is_over:
            return
        if self.ai_thinking:
            return  # already pending
        self.ai_thinking = True
        delay_ms = int(round(self.config.ai_move_delay * 1000))
        logger.debug("ai (%s) move scheduled in %d ms", self.state.ai_sign.value, delay_ms)
        self._ai_timer.start(delay_ms)

    @Slot()
    def _play_ai_move(self):
        """
        timer callback: re-check the round before moving
        """
        if not self.ai_thinking:
            return  # cancelled
        self._ai_timer.stop()
        self.ai_thinking = False
        if self.state.phase.is_over or not self.is_current_turn_ai():
            logger.debug("ai move dropped, round changed while thinking")
            return
        index = select_ai_move(self.board, self.state.ai_sign, self.state.human_sign)
        if index is None:
            logger.warning("ai found no move on board with %d moves", self.state.move_count)
            return
        self.apply_move(index, self.state.ai_sign)
