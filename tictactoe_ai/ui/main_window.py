import logging

from ..board import Sign
from ..errors import GameError
from ..game_logic import GameEngine
from ..ui.board_widget import BoardWidget, O_COLOR, X_COLOR

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QLineEdit,
    QStackedWidget, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, Slot

logger = logging.getLogger(__name__)

ACTIVE_STYLE = "color: {color}; font-weight: bold; border: 2px solid {color}; border-radius: 4px;"
INACTIVE_STYLE = "color: #777; border: 2px solid transparent;"


class TicTacToeWindow(QMainWindow):
    """
    main window: start menu page + game page
    """
    def __init__(self, config=None):
        """
        init engine, ui widgets, signals
        """
        super().__init__()
        self.engine = GameEngine(config, parent=self)
        self.board_widget = BoardWidget(self.engine, parent=self)

        self._setup_ui()
        self._connect_engine()
        self.stack.setCurrentWidget(self.menu_page)

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Tic-Tac-Toe")
        self.setStyleSheet("QMainWindow { background-color: #222; }")
        self.stack = QStackedWidget()
        self.setCentralWidget(self.stack)
        self._create_menu_bar()            # top menu
        self._create_menu_page()           # mode selection
        self._create_game_page()           # names + board + buttons
        self.stack.addWidget(self.menu_page)
        self.stack.addWidget(self.game_page)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        pvp_action = QAction("Player vs Player", self)
        pvp_action.triggered.connect(lambda: self.start_game(False))
        ai_action = QAction("Player vs AI", self)
        ai_action.triggered.connect(lambda: self.start_game(True))
        menu_action = QAction("Back to Menu", self)
        menu_action.triggered.connect(self.show_start_menu)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (pvp_action, ai_action, menu_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_menu_page(self):
        '''title + mode buttons'''
        self.menu_page = QWidget()
        layout = QVBoxLayout(self.menu_page)
        title = QLabel("Tic-Tac-Toe")
        f = QFont(); f.setPointSize(28); f.setBold(True); title.setFont(f)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet("color: #eee;")
        self.pvp_button = QPushButton("Player vs Player")
        self.pvp_button.clicked.connect(lambda: self.start_game(False))
        self.pvai_button = QPushButton("Player vs AI")
        self.pvai_button.clicked.connect(lambda: self.start_game(True))
        layout.addStretch(1); layout.addWidget(title)
        for b in (self.pvp_button, self.pvai_button):
            b.setMinimumWidth(200)
            layout.addWidget(b, alignment=Qt.AlignCenter)
        layout.addStretch(1)

    def _create_game_page(self):
        '''player bar, board, status + buttons'''
        self.game_page = QWidget()
        layout = QVBoxLayout(self.game_page)

        # player bar: [sign] name1 ... name2 [sign], signs follow the slots
        bar = QHBoxLayout()
        self.player_icons = {}; self.name_inputs = {}
        for slot, sign in ((1, Sign.X), (2, Sign.O)):
            icon = QLabel(sign.value)
            f = QFont(); f.setPointSize(16); f.setBold(True); icon.setFont(f)
            icon.setAlignment(Qt.AlignCenter); icon.setFixedWidth(36)
            edit = QLineEdit()
            edit.setPlaceholderText(self._default_name(slot))
            edit.textChanged.connect(lambda text, s=slot: self.engine.set_player_name(s, text))
            self.player_icons[slot] = icon; self.name_inputs[slot] = edit
        bar.addWidget(self.player_icons[1]); bar.addWidget(self.name_inputs[1])
        bar.addStretch(1)
        bar.addWidget(self.name_inputs[2]); bar.addWidget(self.player_icons[2])
        layout.addLayout(bar)

        layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        # status label + rematch/menu buttons
        bottom = QHBoxLayout()
        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.rematch_button = QPushButton("Rematch"); self.rematch_button.clicked.connect(self.engine.rematch)
        self.back_button = QPushButton("Back to Menu"); self.back_button.clicked.connect(self.show_start_menu)
        bottom.addWidget(self.message_label); bottom.addStretch(1)
        bottom.addWidget(self.rematch_button); bottom.addWidget(self.back_button)
        layout.addLayout(bottom)

    def _connect_engine(self):
        self.engine.move_applied.connect(lambda *_: self.board_widget.update())
        self.engine.turn_changed.connect(self._on_turn_changed)
        self.engine.game_ended.connect(self._on_game_ended)
        self.engine.round_started.connect(self._on_round_started)

    def _default_name(self, slot):
        cfg = self.engine.config
        return cfg.player1_default if slot == 1 else cfg.player2_default

    def _update_message(self, text, is_error=False,
                         is_success=False, is_turn=False):
        # set message text + style
        style = "color: #eee;"
        if is_error:   style = "color: #ff8a8a; font-weight: bold;"
        elif is_success: style = "color: lime; font-weight: bold;"
        elif is_turn:    style = "color: #8acaff; font-weight: bold;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)

    def _update_name_inputs(self):
        # lock the ai slot (always slot 2), show stored names elsewhere
        for slot in (1, 2):
            edit = self.name_inputs[slot]
            is_ai = self.engine.ai_enabled and slot == 2
            edit.blockSignals(True)
            edit.setText(self.engine.config.ai_name if is_ai else self.engine.players[slot-1].name)
            edit.blockSignals(False)
            edit.setEnabled(not is_ai)

    def _update_player_icons(self):
        # each slot shows the sign it plays this round, highlight whoever is to move
        active = self.engine.active_slot()
        for slot in (1, 2):
            sign = self.engine.slot_sign(slot)
            color = X_COLOR if sign is Sign.X else O_COLOR
            self.player_icons[slot].setText(sign.value)
            style = ACTIVE_STYLE.format(color=color) if slot == active else INACTIVE_STYLE
            self.player_icons[slot].setStyleSheet(style)

    def start_game(self, ai_enabled):
        # menu -> game page in the chosen mode
        self.stack.setCurrentWidget(self.game_page)
        self.engine.set_mode(ai_enabled)

    @Slot()
    def show_start_menu(self):
        # leave the round, back to pristine state
        self.engine.full_reset()
        self.stack.setCurrentWidget(self.menu_page)

    @Slot()
    def _on_round_started(self):
        self.rematch_button.setVisible(False)
        self.board_widget.set_accept_clicks(True)
        self._update_name_inputs()
        self.board_widget.update()

    @Slot(object)
    def _on_turn_changed(self, sign):
        self._update_player_icons()
        if self.engine.is_current_turn_ai():
            self._update_message(f"{self.engine.config.ai_name} ({sign.value}) is thinking...")
        else:
            name = self.engine.display_name(sign)
            self._update_message(f"{name}'s ({sign.value}) turn", is_turn=True)

    @Slot(object, str)
    def _on_game_ended(self, phase, text):
        # end game UI updates
        logger.debug("showing result %s", text)
        ai_won = self.engine.ai_enabled and phase.winner is self.engine.state.ai_sign
        self._update_message(text, is_success=not ai_won, is_error=ai_won)
        self.board_widget.set_accept_clicks(False)
        self.rematch_button.setVisible(True)
        self.board_widget.update()

    @Slot(int)
    def _on_cell_clicked(self, index):
        # human move for whoever is to play
        if self.engine.is_current_turn_ai():
            self._update_message("not your turn", is_error=True)
            return
        try:
            self.engine.apply_move(index, self.engine.get_current_turn())
        except GameError as exc:
            self._update_message(str(exc), is_error=True)

    def closeEvent(self, event):
        # no ai move after the window is gone
        self.engine.cancel_ai_move()
        event.accept()
