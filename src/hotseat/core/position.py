"""Position — board plus side to move and en-passant target, with rollback."""

from __future__ import annotations

from dataclasses import dataclass

from hotseat.core.board import Board
from hotseat.core.enums import PROMOTION_TYPES, Color, MoveFlag, PieceType
from hotseat.core.move import Move
from hotseat.core.piece import Piece
from hotseat.core.types import Square, file_of, make_square, rank_of


@dataclass(slots=True)
class Placement:
    """Snapshot of every square a tentative move touched.

    Holds the original piece objects, so :meth:`Position.restore` puts the
    very same instances (and their flags) back.
    """

    move: Move
    saved: dict[Square, Piece | None]
    captured: Piece | None
    captured_sq: Square | None
    rook_move: tuple[Square, Square] | None


class Position:
    """Board + side to move + en-passant target square.

    A move is carried out in stages so that it can be refused after the
    board has changed: :meth:`place` relocates pieces and returns a
    :class:`Placement`, :meth:`restore` undoes it, :meth:`finalize` updates
    the piece flags and en-passant target once the move is accepted, and
    :meth:`pass_turn` hands the move to the other side.
    """

    __slots__ = ("board", "side_to_move", "en_passant")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant: Square | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.en_passant = en_passant

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, white to move."""
        return cls(Board.initial(), Color.WHITE, None)

    # ── Queries ──────────────────────────────────────────────────────────

    def king_square(self, color: Color) -> Square:
        return self.board.king_square(color)

    def en_passant_victim(self) -> Square | None:
        """Square of the pawn that may be taken en passant, if any."""
        if self.en_passant is None:
            return None
        rank = rank_of(self.en_passant)
        # Target on rank 3 means a white pawn stands on rank 4, and so on.
        victim_rank = rank + 1 if rank == 2 else rank - 1
        return make_square(file_of(self.en_passant), victim_rank)

    # ── Staged move application ──────────────────────────────────────────

    def place(self, move: Move) -> Placement:
        """Relocate the pieces of *move* on the board.

        Covers the captured piece (including an en-passant victim) and the
        rook of a castle, so that a check test afterwards sees the complete
        resulting board. Flags and turn are left alone.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = move.to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
        rook_move = move.rook_squares

        touched = [move.from_sq, move.to_sq, capture_sq]
        if rook_move is not None:
            touched.extend(rook_move)
        saved = {sq: board[sq] for sq in touched}

        captured = board[capture_sq]
        board[move.from_sq] = None
        board[capture_sq] = None
        board[move.to_sq] = piece

        if rook_move is not None:
            rook_from, rook_to = rook_move
            rook = board[rook_from]
            if rook is None:
                raise ValueError(f"No rook to castle with on {rook_from}")
            board[rook_from] = None
            board[rook_to] = rook

        return Placement(
            move=move,
            saved=saved,
            captured=captured,
            captured_sq=capture_sq if captured is not None else None,
            rook_move=rook_move,
        )

    def restore(self, placement: Placement) -> None:
        """Undo :meth:`place` exactly."""
        board = self.board
        # Clear first so the king cache cannot be left pointing at a
        # square another piece is restored onto.
        for sq in placement.saved:
            board[sq] = None
        for sq, piece in placement.saved.items():
            board[sq] = piece

    def finalize(self, move: Move) -> None:
        """Update flags and the en-passant target after an accepted move."""
        board = self.board

        # En passant is only ever available for one half-move.
        victim_sq = self.en_passant_victim()
        if victim_sq is not None:
            victim = board[victim_sq]
            if victim is not None:
                victim.clear_en_passant()
        self.en_passant = None

        piece = board[move.to_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.to_sq} to finalize")
        piece.mark_moved()

        rook_move = move.rook_squares
        if rook_move is not None:
            rook = board[rook_move[1]]
            if rook is not None:
                rook.mark_moved()

        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )
            piece.mark_en_passant()

    def promote(self, sq: Square, piece_type: PieceType) -> Piece:
        """Replace the pawn on *sq* with a new piece of *piece_type*."""
        if piece_type not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {piece_type!r}")
        pawn = self.board[sq]
        if pawn is None or pawn.piece_type != PieceType.PAWN:
            raise ValueError(f"No pawn to promote on {sq}")
        promoted = Piece(pawn.color, piece_type, has_moved=True)
        self.board[sq] = promoted
        return promoted

    def pass_turn(self) -> None:
        self.side_to_move = self.side_to_move.opposite

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy (board and pieces included)."""
        return Position(self.board.copy(), self.side_to_move, self.en_passant)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.en_passant == other.en_passant
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
