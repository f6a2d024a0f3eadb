from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, Signal, QPointF
from PySide6.QtGui import QPainter, QColor, QPen

from ..board import BOARD_SIZE, Sign

X_COLOR = "#8acaff"
O_COLOR = "#ff8a8a"


class BoardWidget(QWidget):
    """
    custom widget to draw and click on tic-tac-toe board
    """
    cell_clicked = Signal(int)  # emits cell index 0..8 on click

    def __init__(self, engine, parent=None):
        super().__init__(parent)
        self.engine = engine  # reference to game engine
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def accepts_clicks(self):
        # no clicks after game over or while the ai is to move
        return (self._accept_clicks
                and not self.engine.get_phase().is_over
                and not self.engine.is_current_turn_ai())

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _geometry(self):
        w, h = self.width(), self.height()
        side = min(w, h)
        return (w-side)/2, (h-side)/2, side

    def cell_at(self, x, y):
        """
        map widget coords to a cell index, None outside the grid
        """
        ox, oy, side = self._geometry()
        if not (ox <= x < ox+side and oy <= y < oy+side):
            return None
        cell = side / BOARD_SIZE
        if cell <= 0: return None
        col = int((x-ox)//cell); row = int((y-oy)//cell)
        # clamp to valid range
        row = max(0, min(row, BOARD_SIZE-1)); col = max(0, min(col, BOARD_SIZE-1))
        return row*BOARD_SIZE + col

    def paintEvent(self, event):
        """
        draw grid, X/O marks, and highlight the winning line
        """
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            offset_x, offset_y, side = self._geometry()
            # background
            painter.fillRect(self.rect(), QColor("#333"))
            cell_size = side / BOARD_SIZE
            # grid lines
            painter.setPen(QPen(QColor("#555"), 2))
            for i in range(1, BOARD_SIZE):
                x = offset_x + i*cell_size
                painter.drawLine(int(x), int(offset_y), int(x), int(offset_y+side))
                y = offset_y + i*cell_size
                painter.drawLine(int(offset_x), int(y), int(offset_x+side), int(y))

            def center(index):
                r, c = divmod(index, BOARD_SIZE)
                return QPointF(offset_x + c*cell_size + cell_size/2,
                               offset_y + r*cell_size + cell_size/2)

            # draw marks
            rad = cell_size/2 * 0.7
            for index, sym in enumerate(self.engine.board):
                if sym is Sign.EMPTY: continue
                p = center(index)
                cx, cy = p.x(), p.y()
                if sym is Sign.X:
                    painter.setPen(QPen(QColor(X_COLOR), 4))
                    # two crossing lines
                    painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                    painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
                else:
                    painter.setPen(QPen(QColor(O_COLOR), 4))
                    painter.drawEllipse(p, rad, rad)
            # strike through the winning line
            line = self.engine.state.winning_line
            if line is not None:
                winner = self.engine.get_phase().winner
                color = QColor(X_COLOR) if winner is Sign.X else QColor(O_COLOR)
                painter.setPen(QPen(color, 8, Qt.SolidLine, Qt.RoundCap, Qt.RoundJoin))
                painter.drawLine(center(line[0]), center(line[-1]))
        finally:
            painter.end()

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if not self.accepts_clicks():
            return
        index = self.cell_at(event.position().x(), event.position().y())
        if index is not None:
            self.cell_clicked.emit(index)  # notify main window
