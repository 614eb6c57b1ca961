"""Promotion dialog — asks which piece a pawn on the last rank becomes."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QKeySequence
from PyQt6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QGridLayout,
    QLabel,
    QPushButton,
    QWidget,
)

from hotseat.core.enums import PROMOTION_TYPES, Color, PieceType
from hotseat.core.piece import Piece

_SHORTCUTS: dict[PieceType, str] = {
    PieceType.QUEEN: "Q",
    PieceType.ROOK: "R",
    PieceType.BISHOP: "B",
    PieceType.KNIGHT: "N",
}


class PromotionDialog(QDialog):
    """One figurine button per promotion piece, plus Cancel.

    Each button also answers to its letter key (Q, R, B, N).
    """

    def __init__(self, color: Color, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle("Promotion")
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._selected = PieceType.QUEEN
        self._buttons: dict[PieceType, QPushButton] = {}

        grid = QGridLayout(self)
        prompt = QLabel(f"Promote the {color} pawn to:")
        prompt.setAlignment(Qt.AlignmentFlag.AlignCenter)
        grid.addWidget(prompt, 0, 0, 1, len(PROMOTION_TYPES))

        glyph_font = QFont("DejaVu Sans")
        glyph_font.setPixelSize(44)
        for col, kind in enumerate(PROMOTION_TYPES):
            button = QPushButton(Piece(color, kind).symbol)
            button.setFont(glyph_font)
            button.setFixedSize(72, 72)
            button.setToolTip(f"{str(kind).capitalize()} ({_SHORTCUTS[kind]})")
            button.setShortcut(QKeySequence(_SHORTCUTS[kind]))
            button.clicked.connect(lambda _checked, k=kind: self._choose(k))
            grid.addWidget(button, 1, col)
            self._buttons[kind] = button

        cancel = QDialogButtonBox(QDialogButtonBox.StandardButton.Cancel, self)
        cancel.rejected.connect(self.reject)
        grid.addWidget(cancel, 2, 0, 1, len(PROMOTION_TYPES))

    def _choose(self, kind: PieceType) -> None:
        self._selected = kind
        self.accept()

    @property
    def selected(self) -> PieceType:
        return self._selected

    @staticmethod
    def ask(color: Color, parent: QWidget | None = None) -> PieceType | None:
        """Run the dialog; ``None`` when the player cancels."""
        dialog = PromotionDialog(color, parent)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            return dialog.selected
        return None
