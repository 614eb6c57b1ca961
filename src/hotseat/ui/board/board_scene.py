"""BoardScene — the chessboard as a QGraphicsScene."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from hotseat.core.enums import Color
from hotseat.core.types import FILES, RANKS, Square, file_of, make_square, rank_of
from hotseat.ui.board.piece_item import PieceItem
from hotseat.ui.styles.theme import BoardTheme

if TYPE_CHECKING:
    from hotseat.game.state import GameState, MoveOutcome

# Stacking order of the scene layers.
_Z_SQUARE = 0.0
_Z_COORD = 0.2
_Z_LAST_MOVE = 0.4
_Z_CHECK = 0.6
_Z_SELECTED = 0.8
_Z_PIECE = 1.0
_Z_DOT = 2.0


class BoardScene(QGraphicsScene):
    """Squares, coordinate labels, pieces and overlays for one game.

    The scene also owns piece selection. With nothing selected, a click on
    a piece of the side to move selects it. Clicking it again deselects,
    clicking another own piece moves the selection, and clicking anywhere
    else asks for the move through :attr:`move_requested`. Whether that
    move is legal is for the receiver to decide.

    Signals:
        move_requested(int, int): origin and destination squares.
    """

    move_requested = pyqtSignal(int, int)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._state: GameState | None = None
        self._flipped = False
        self._interactive = True
        self._show_coordinates = True
        self._show_legal_moves = True
        self._selected_sq: Square | None = None
        self._last_outcome: MoveOutcome | None = None

        self._tile_items: list[QGraphicsRectItem] = []
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._piece_items: dict[Square, PieceItem] = {}
        self._selection_items: list[QGraphicsRectItem] = []
        self._legal_dot_items: list[QGraphicsEllipseItem] = []
        self._last_move_highlights: list[QGraphicsRectItem] = []
        self._check_items: list[QGraphicsRectItem] = []

        self.setSceneRect(0, 0, 8 * self.TILE, 8 * self.TILE)
        self._redraw()

    # ── Game binding ─────────────────────────────────────────────────────

    def set_state(self, state: GameState) -> None:
        self._state = state
        self.refresh()

    def refresh(self) -> None:
        """Redraw pieces and the check marker from the bound game."""
        self.clear_selection()
        self._place_pieces()
        self.highlight_check()

    @property
    def selected_square(self) -> Square | None:
        return self._selected_sq

    def set_interactive(self, interactive: bool) -> None:
        self._interactive = interactive
        if not interactive:
            self.clear_selection()

    # ── Display options ──────────────────────────────────────────────────

    def set_flipped(self, flipped: bool) -> None:
        """Show black at the bottom when *flipped*."""
        self._flipped = flipped
        self._redraw()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._redraw()

    def set_show_coordinates(self, visible: bool) -> None:
        self._show_coordinates = visible
        for label in self._coord_items:
            label.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        self._show_legal_moves = visible
        if not visible:
            self._drop(self._legal_dot_items)

    # ── Overlays ─────────────────────────────────────────────────────────

    def highlight_last_move(self, outcome: MoveOutcome | None) -> None:
        """Mark every square *outcome* changed; ``None`` clears the marks."""
        self._drop(self._last_move_highlights)
        self._last_outcome = outcome
        if outcome is None:
            return
        self._last_move_highlights.extend(
            self._overlay(sq, self._theme.last_move, _Z_LAST_MOVE)
            for sq in outcome.touched_squares
        )

    def highlight_check(self) -> None:
        """Mark the king of the side to move if it is attacked."""
        self._drop(self._check_items)
        state = self._state
        if state is None or not state.is_in_check():
            return
        king_sq = state.position.king_square(state.side_to_move)
        self._check_items.append(
            self._overlay(king_sq, self._theme.highlight_check, _Z_CHECK)
        )

    # ── Selection ────────────────────────────────────────────────────────

    def click_square(self, sq: Square) -> None:
        """Feed one click on *sq* into the selection logic."""
        state = self._state
        if state is None or not self._interactive:
            return

        piece = state.position.board[sq]
        own = piece is not None and piece.color == state.side_to_move
        origin = self._selected_sq

        if origin == sq:
            self.clear_selection()
        elif own:
            self._select(sq)
        elif origin is not None:
            self.clear_selection()
            self.move_requested.emit(origin, sq)

    def clear_selection(self) -> None:
        """Drop the selected piece and its destination dots."""
        self._selected_sq = None
        self._drop(self._selection_items)
        self._drop(self._legal_dot_items)

    def _select(self, sq: Square) -> None:
        self.clear_selection()
        self._selected_sq = sq
        self._selection_items.append(
            self._overlay(sq, self._theme.highlight_from, _Z_SELECTED)
        )
        if self._show_legal_moves and self._state is not None:
            self._legal_dot_items.extend(
                self._dot(target) for target in self._state.legal_destinations(sq)
            )

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is not None and event.button() == Qt.MouseButton.LeftButton:
            sq = self._pos_to_square(event.scenePos())
            if sq is None:
                self.clear_selection()
            else:
                self.click_square(sq)
        super().mousePressEvent(event)

    # ── Drawing ──────────────────────────────────────────────────────────

    def _redraw(self) -> None:
        """Rebuild everything whose position depends on orientation or theme."""
        self._draw_tiles()
        self._draw_coordinates()
        self._place_pieces()
        self.highlight_last_move(self._last_outcome)
        self.highlight_check()
        if self._selected_sq is not None:
            self._select(self._selected_sq)

    def _draw_tiles(self) -> None:
        self._drop(self._tile_items)
        for sq in range(64):
            dark = (file_of(sq) + rank_of(sq)) % 2 == 0
            color = self._theme.dark_square if dark else self._theme.light_square
            self._tile_items.append(self._overlay(sq, color, _Z_SQUARE))

    def _draw_coordinates(self) -> None:
        self._drop(self._coord_items)
        t = self.TILE
        font = QFont("DejaVu Sans")
        font.setPixelSize(max(10, t // 7))

        # Ranks along the left edge, files along the bottom edge.
        for row in range(8):
            sq = self._square_at_cell(0, row)
            self._add_label(RANKS[rank_of(sq)], sq, font, QPointF(3, 1))
        for col in range(8):
            sq = self._square_at_cell(col, 7)
            self._add_label(FILES[file_of(sq)], sq, font, QPointF(t - 13, t - 17))

    def _add_label(self, text: str, sq: Square, font: QFont, inset: QPointF) -> None:
        dark = (file_of(sq) + rank_of(sq)) % 2 == 0
        label = QGraphicsSimpleTextItem(text)
        label.setFont(font)
        theme = self._theme
        label.setBrush(QBrush(theme.coord_light if dark else theme.coord_dark))
        label.setPos(self._tile_rect(sq).topLeft() + inset)
        label.setZValue(_Z_COORD)
        label.setVisible(self._show_coordinates)
        self.addItem(label)
        self._coord_items.append(label)

    def _place_pieces(self) -> None:
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()
        if self._state is None:
            return

        theme = self._theme
        for sq, piece in self._state.position.board:
            if piece.color == Color.WHITE:
                fill, outline = theme.piece_white, theme.piece_black
            else:
                fill, outline = theme.piece_black, theme.piece_white
            item = PieceItem(piece, sq, self.TILE, fill, outline)
            item.setZValue(_Z_PIECE)
            item.place_in_tile(*self._cell_of(sq))
            self.addItem(item)
            self._piece_items[sq] = item

    def _overlay(self, sq: Square, color: QColor, z: float) -> QGraphicsRectItem:
        """Filled square-sized rectangle over *sq*."""
        rect = QGraphicsRectItem(self._tile_rect(sq))
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(z)
        self.addItem(rect)
        return rect

    def _dot(self, sq: Square) -> QGraphicsEllipseItem:
        tile = self._tile_rect(sq)
        size = self.TILE * 0.3
        dot = QGraphicsEllipseItem(QRectF(0, 0, size, size))
        dot.setPos(tile.center() - QPointF(size / 2, size / 2))
        dot.setBrush(QBrush(self._theme.highlight_to))
        dot.setPen(QPen(Qt.PenStyle.NoPen))
        dot.setZValue(_Z_DOT)
        self.addItem(dot)
        return dot

    def _drop(self, items: list) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    # ── Geometry ─────────────────────────────────────────────────────────

    def _cell_of(self, sq: Square) -> tuple[int, int]:
        """Visual (column, row) of *sq*, row 0 at the top."""
        if self._flipped:
            return 7 - file_of(sq), rank_of(sq)
        return file_of(sq), 7 - rank_of(sq)

    def _square_at_cell(self, col: int, row: int) -> Square:
        if self._flipped:
            return make_square(7 - col, row)
        return make_square(col, 7 - row)

    def _tile_rect(self, sq: Square) -> QRectF:
        col, row = self._cell_of(sq)
        t = self.TILE
        return QRectF(col * t, row * t, t, t)

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        col, row = int(pos.x() // self.TILE), int(pos.y() // self.TILE)
        if col not in range(8) or row not in range(8):
            return None
        return self._square_at_cell(col, row)
