import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

from tictactoe_ai.board import Sign
from tictactoe_ai.config import GameConfig
from tictactoe_ai.ui.main_window import TicTacToeWindow


class TestMainWindowHeadless(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self) -> None:
        self.window = TicTacToeWindow(GameConfig(ai_move_delay=0.0))
        self.addCleanup(self.window.close)
        self.engine = self.window.engine

    def test_starts_on_menu(self) -> None:
        self.assertIs(self.window.stack.currentWidget(), self.window.menu_page)

    def test_local_game_reports_winner_name(self) -> None:
        self.window.pvp_button.click()
        self.assertIs(self.window.stack.currentWidget(), self.window.game_page)
        self.window.name_inputs[1].setText("Ada")
        self.assertEqual(self.engine.players[0].name, "Ada")
        for index in (0, 3, 1, 4):
            self.window._on_cell_clicked(index)
        self.assertTrue(self.window.rematch_button.isHidden())
        self.window._on_cell_clicked(2)
        self.assertEqual(self.window.message_label.text(), "Ada")
        self.assertFalse(self.window.rematch_button.isHidden())

    def test_taken_cell_shows_reason(self) -> None:
        self.window.start_game(False)
        self.window._on_cell_clicked(4)
        self.window._on_cell_clicked(4)
        self.assertEqual(self.window.message_label.text(), "cell taken")
        self.assertEqual(self.engine.state.move_count, 1)

    def test_ai_mode_locks_ai_name_field(self) -> None:
        self.window.pvai_button.click()
        self.assertTrue(self.engine.ai_enabled)
        self.assertFalse(self.window.name_inputs[2].isEnabled())
        self.assertEqual(self.window.name_inputs[2].text(), "AI Player")
        self.assertTrue(self.window.name_inputs[1].isEnabled())
        # the locked text is not stored as the player's name
        self.assertEqual(self.engine.players[1].name, "")

    def test_rematch_in_ai_mode_keeps_human_in_first_slot(self) -> None:
        self.window.start_game(True)
        self.window.name_inputs[1].setText("Ada")
        self.window.rematch_button.click()
        self.assertIs(self.engine.state.ai_sign, Sign.X)
        # slots keep their player, the icons follow the swapped signs
        self.assertTrue(self.window.name_inputs[1].isEnabled())
        self.assertEqual(self.window.name_inputs[1].text(), "Ada")
        self.assertFalse(self.window.name_inputs[2].isEnabled())
        self.assertEqual(self.window.player_icons[1].text(), "O")
        self.assertEqual(self.window.player_icons[2].text(), "X")
        self.assertIn("thinking", self.window.message_label.text())
        # clicks are ignored while the ai is to move
        self.assertFalse(self.window.board_widget.accepts_clicks())

    def test_back_to_menu_resets_engine(self) -> None:
        self.window.start_game(True)
        self.window._on_cell_clicked(0)
        self.window.back_button.click()
        self.assertIs(self.window.stack.currentWidget(), self.window.menu_page)
        self.assertFalse(self.engine.ai_enabled)
        self.assertFalse(self.engine.ai_thinking)
        self.assertEqual(self.engine.board.filled_count(), 0)

    def test_board_widget_maps_clicks_to_cells(self) -> None:
        widget = self.window.board_widget
        widget.resize(300, 300)
        self.assertEqual(widget.cell_at(10, 10), 0)
        self.assertEqual(widget.cell_at(150, 150), 4)
        self.assertEqual(widget.cell_at(290, 290), 8)
        self.assertIsNone(widget.cell_at(-5, 10))


if __name__ == "__main__":
    unittest.main()
