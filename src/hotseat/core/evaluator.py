"""Move legality evaluation and attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hotseat.core.enums import Color, MoveFlag, PieceType
from hotseat.core.paths import is_blocked
from hotseat.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from hotseat.core.board import Board
    from hotseat.core.piece import Piece


KING_HOME_FILE = 4

# file delta of the king -> (flag, rook file, files the king stands on / crosses)
_CASTLES: dict[int, tuple[MoveFlag, int, tuple[int, ...]]] = {
    2: (MoveFlag.CASTLE_KINGSIDE, 7, (4, 5, 6)),
    -2: (MoveFlag.CASTLE_QUEENSIDE, 0, (4, 3, 2)),
}


class MoveEvaluator:
    """Decides whether a piece may move to a square on a given :class:`Board`.

    Evaluation never mutates the board. Special moves are reported through
    the returned :class:`MoveFlag` so the caller can carry out the side
    effects (removing an en-passant victim, sliding the castling rook).

    ``attack_only`` asks a narrower question: could this piece capture on
    the square? Pawns then threaten diagonally whether or not the square is
    occupied, never straight ahead, and kings never castle.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    # -- Public API ---------------------------------------------------------

    def is_legal(
        self, from_sq: Square, to_sq: Square, *, attack_only: bool = False
    ) -> bool:
        return self.classify(from_sq, to_sq, attack_only=attack_only) is not None

    def classify(
        self, from_sq: Square, to_sq: Square, *, attack_only: bool = False
    ) -> MoveFlag | None:
        """Classify the move of the piece on *from_sq* to *to_sq*.

        Returns ``None`` when the move breaks the piece's movement rules.
        Self-check is not considered here.
        """
        board = self._board
        piece = board[from_sq]
        if piece is None or from_sq == to_sq:
            return None

        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return None

        dx = file_of(to_sq) - file_of(from_sq)
        dy = rank_of(to_sq) - rank_of(from_sq)
        ptype = piece.piece_type

        if ptype == PieceType.PAWN:
            return self._classify_pawn(piece, from_sq, to_sq, dx, dy, attack_only)
        if ptype == PieceType.ROOK:
            return self._slide(from_sq, to_sq, (dx == 0) != (dy == 0))
        if ptype == PieceType.KNIGHT:
            if {abs(dx), abs(dy)} == {1, 2}:
                return MoveFlag.NORMAL
            return None
        if ptype == PieceType.BISHOP:
            return self._slide(from_sq, to_sq, abs(dx) == abs(dy))
        if ptype == PieceType.QUEEN:
            aligned = (dx == 0) != (dy == 0) or abs(dx) == abs(dy)
            return self._slide(from_sq, to_sq, aligned)
        if ptype == PieceType.KING:
            if abs(dx) < 2 and abs(dy) < 2:
                return MoveFlag.NORMAL
            if attack_only:
                return None
            return self._classify_castle(piece, from_sq, dx, dy)
        return None

    # -- Attack detection ---------------------------------------------------

    def is_attacked(self, color: Color, sq: Square) -> bool:
        """Can any piece of *color*'s opponent capture on *sq*?"""
        board = self._board
        attacker = color.opposite
        occupant = board[sq]
        if occupant is not None and occupant.color == attacker:
            return False
        return any(
            self.classify(from_sq, sq, attack_only=True) is not None
            for from_sq in board.all_pieces(attacker)
        )

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return self.is_attacked(color, self._board.king_square(color))

    # -- Piece-specific rules (private) ------------------------------------

    def _slide(self, from_sq: Square, to_sq: Square, aligned: bool) -> MoveFlag | None:
        if aligned and not is_blocked(self._board, from_sq, to_sq):
            return MoveFlag.NORMAL
        return None

    def _classify_pawn(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        dx: int,
        dy: int,
        attack_only: bool,
    ) -> MoveFlag | None:
        board = self._board
        forward = dy * piece.color.forward
        advance = (
            MoveFlag.PROMOTION
            if rank_of(to_sq) == piece.color.promotion_rank
            else MoveFlag.NORMAL
        )

        if dx == 0:
            # A pawn never threatens the square in front of it.
            if attack_only or board[to_sq] is not None:
                return None
            if forward == 1:
                return advance
            if (
                forward == 2
                and piece.can_double_move
                and not is_blocked(board, from_sq, to_sq)
            ):
                return MoveFlag.DOUBLE_PAWN
            return None

        if abs(dx) != 1 or forward != 1:
            return None

        if board[to_sq] is not None or attack_only:
            return advance

        victim = board[make_square(file_of(to_sq), rank_of(from_sq))]
        if (
            victim is not None
            and victim.piece_type == PieceType.PAWN
            and victim.color != piece.color
            and victim.en_passant_eligible
        ):
            return MoveFlag.EN_PASSANT
        return None

    def _classify_castle(
        self, king: Piece, from_sq: Square, dx: int, dy: int
    ) -> MoveFlag | None:
        castle = _CASTLES.get(dx)
        if castle is None or dy != 0 or not king.can_castle:
            return None

        rank = king.color.home_rank
        if from_sq != make_square(KING_HOME_FILE, rank):
            return None

        flag, rook_file, king_files = castle
        board = self._board
        rook_sq = make_square(rook_file, rank)
        rook = board[rook_sq]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or not rook.can_castle
        ):
            return None

        if is_blocked(board, from_sq, rook_sq):
            return None

        for file in king_files:
            if self.is_attacked(king.color, make_square(file, rank)):
                return None
        return flag
