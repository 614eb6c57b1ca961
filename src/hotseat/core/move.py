"""Move: an origin, a destination and how the move is carried out."""

from __future__ import annotations

from dataclasses import dataclass

from hotseat.core.enums import MoveFlag, PieceType
from hotseat.core.types import Square, make_square, rank_of, square_name

# castle flag -> (rook file before, rook file after)
_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


@dataclass(frozen=True, slots=True)
class Move:
    """One classified move.

    For castling *from_sq*/*to_sq* are the king's squares; the rook's part
    is derived through :attr:`rook_squares`. ``promotion`` is only filled
    in once the promotion piece has been chosen.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    @property
    def rook_squares(self) -> tuple[Square, Square] | None:
        if not self.flag.is_castle:
            return None
        files = _ROOK_FILES[self.flag]
        rank = rank_of(self.from_sq)
        return make_square(files[0], rank), make_square(files[1], rank)

    @property
    def uci(self) -> str:
        """Long algebraic text, e.g. ``e2e4`` or ``e7e8q``."""
        text = square_name(self.from_sq) + square_name(self.to_sq)
        if self.promotion is not None:
            # knight is written "n"
            kind = self.promotion
            text += "n" if kind == PieceType.KNIGHT else str(kind)[0]
        return text

    def __str__(self) -> str:
        return self.uci
