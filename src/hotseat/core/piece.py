"""Piece: kind and color plus the per-instance move history flags."""

from __future__ import annotations

from dataclasses import dataclass, field

from hotseat.core.enums import Color, PieceType

# Indexed by PieceType - 1 (pawn .. king).
_LETTERS = "pnbrqk"
_FIGURINES = {Color.WHITE: "♙♘♗♖♕♔", Color.BLACK: "♟♞♝♜♛♚"}

_CASTLING_TYPES = (PieceType.ROOK, PieceType.KING)


@dataclass(slots=True)
class Piece:
    """A chess piece on the board.

    ``color`` and ``piece_type`` never change. ``has_moved`` only ever goes
    from False to True and backs both :attr:`can_double_move` (pawns) and
    :attr:`can_castle` (rooks and kings). The en-passant flag exists for
    pawns only and lives for exactly one half-move.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False
    _en_passant: bool = field(default=False, init=False, repr=False)

    # ── Kind-gated flags ─────────────────────────────────────────────────

    @property
    def can_double_move(self) -> bool:
        return self.piece_type == PieceType.PAWN and not self.has_moved

    @property
    def can_castle(self) -> bool:
        return self.piece_type in _CASTLING_TYPES and not self.has_moved

    @property
    def en_passant_eligible(self) -> bool:
        return self._en_passant

    def mark_moved(self) -> None:
        self.has_moved = True

    def mark_en_passant(self) -> None:
        if self.piece_type != PieceType.PAWN:
            raise ValueError(f"Only pawns can be captured en passant, not {self!r}")
        self._en_passant = True

    def clear_en_passant(self) -> None:
        self._en_passant = False

    def copy(self) -> Piece:
        clone = Piece(self.color, self.piece_type, self.has_moved)
        clone._en_passant = self._en_passant
        return clone

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter as in FEN: uppercase for white, lowercase for black."""
        letter = _LETTERS[self.piece_type - 1]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str, *, has_moved: bool = False) -> Piece:
        """Piece for a FEN letter, ``"N"`` gives a white knight."""
        index = _LETTERS.find(char.lower()) if len(char) == 1 else -1
        if index < 0:
            raise ValueError(f"Invalid piece character: {char!r}")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, PieceType(index + 1), has_moved)

    @property
    def symbol(self) -> str:
        """Unicode figurine, e.g. ``♞`` for a black knight."""
        return _FIGURINES[self.color][self.piece_type - 1]
