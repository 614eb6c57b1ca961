"""Board: what stands on each of the 64 squares."""

from __future__ import annotations

from collections.abc import Iterator

from hotseat.core.enums import Color, PieceType
from hotseat.core.piece import Piece
from hotseat.core.types import FILES, Square, make_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable square -> piece mapping.

    Indexing with a square reads or writes the occupant (``None`` for
    empty). Writes keep a per-color king location so check tests never
    scan the board for the king.
    """

    __slots__ = ("_squares", "_kings")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        self._kings: dict[Color, Square] = {}

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        previous = self._squares[sq]
        if previous is not None and previous.piece_type == PieceType.KING:
            if self._kings.get(previous.color) == sq:
                del self._kings[previous.color]
        self._squares[sq] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._kings[piece.color] = sq

    def __iter__(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares in index order, with their pieces."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # ── Queries ──────────────────────────────────────────────────────────

    def all_pieces(self, color: Color) -> list[Square]:
        """Squares holding any of *color*'s pieces."""
        return [sq for sq, piece in self if piece.color == color]

    def king_square(self, color: Color) -> Square:
        try:
            return self._kings[color]
        except KeyError:
            raise ValueError(f"No {color.name} king on board") from None

    def has_king(self, color: Color) -> bool:
        return color in self._kings

    # ── Copying / setup ──────────────────────────────────────────────────

    def copy(self) -> Board:
        """Deep copy; pieces carry mutable flags and are cloned too."""
        clone = Board()
        clone._squares = [p.copy() if p is not None else None for p in self._squares]
        clone._kings = dict(self._kings)
        return clone

    @classmethod
    def initial(cls) -> Board:
        """Pieces in the standard starting arrangement, none moved."""
        board = cls()
        for file, kind in enumerate(_BACK_RANK):
            for color in Color:
                home = color.home_rank
                board[make_square(file, home)] = Piece(color, kind)
                board[make_square(file, home + color.forward)] = Piece(
                    color, PieceType.PAWN
                )
        return board

    # ── Comparison / display ─────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        lines = []
        for rank in range(7, -1, -1):
            cells = (self._squares[make_square(f, rank)] for f in range(8))
            lines.append(
                f"{rank + 1} " + " ".join(str(p) if p else "." for p in cells)
            )
        lines.append("  " + " ".join(FILES))
        return "\n".join(lines)
