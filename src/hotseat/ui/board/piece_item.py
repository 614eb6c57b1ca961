"""PieceItem — a chess piece drawn as a Unicode figurine on the scene."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QCursor, QFont, QPen
from PyQt6.QtWidgets import QGraphicsItem, QGraphicsSimpleTextItem

from hotseat.core.piece import Piece
from hotseat.core.types import Square


class PieceItem(QGraphicsSimpleTextItem):
    """A single chess piece on the board.

    Stores its logical *square*; clicks are handled by the scene.
    """

    _FONT_RATIO = 0.72

    def __init__(
        self,
        piece: Piece,
        square: Square,
        tile_size: int,
        fill: QColor,
        outline: QColor,
    ) -> None:
        super().__init__(piece.symbol)
        self.piece = piece
        self.square = square
        self._tile_size = tile_size

        self.setBrush(QBrush(fill))
        self.setPen(QPen(outline, 1.0))
        self.setCacheMode(QGraphicsItem.CacheMode.NoCache)
        self.setCursor(QCursor(Qt.CursorShape.PointingHandCursor))
        self.setZValue(1)
        self.set_tile_size(tile_size)

    def set_tile_size(self, size: int) -> None:
        """Update tile size and re-scale the glyph."""
        self._tile_size = size
        font = QFont("DejaVu Sans")
        font.setPixelSize(max(int(size * self._FONT_RATIO), 1))
        self.setFont(font)

    def place_in_tile(self, col: int, row: int) -> None:
        """Centre the glyph inside the visual tile at (*col*, *row*)."""
        t = self._tile_size
        bounds = self.boundingRect()
        self.setPos(
            col * t + (t - bounds.width()) / 2,
            row * t + (t - bounds.height()) / 2,
        )
