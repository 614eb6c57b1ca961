"""Game state machine — turn order, pending promotion and move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from hotseat.core.enums import Color, MoveFlag, PieceType
from hotseat.core.errors import IllegalMoveError, PromotionPendingError, SelfCheckError
from hotseat.core.evaluator import MoveEvaluator
from hotseat.core.move import Move
from hotseat.core.piece import Piece
from hotseat.core.position import Placement, Position
from hotseat.core.types import Square, is_valid_square, square_name
from hotseat.game.interfaces import GamePhase


@dataclass(frozen=True)
class MoveOutcome:
    """What a move did, for whoever renders the board."""

    move: Move
    color: Color
    piece_type: PieceType
    captured: Piece | None = None
    captured_sq: Square | None = None
    rook_move: tuple[Square, Square] | None = None
    promotion: PieceType | None = None
    pending_promotion: bool = False
    check: bool = False

    @property
    def is_castle(self) -> bool:
        return self.rook_move is not None

    @property
    def touched_squares(self) -> tuple[Square, ...]:
        """Every square whose contents changed."""
        squares = [self.move.from_sq, self.move.to_sq]
        if self.captured_sq is not None and self.captured_sq not in squares:
            squares.append(self.captured_sq)
        if self.rook_move is not None:
            squares.extend(self.rook_move)
        return tuple(squares)

    def __str__(self) -> str:
        return str(self.move)


@dataclass
class _PendingPromotion:
    move: Move
    placement: Placement
    before: Position


@dataclass
class GameState:
    """Owns one game: position, phase and history.

    This is a pure data/logic class — no threading, no UI. Every rejected
    attempt leaves the position exactly as it was.
    """

    position: Position = field(default_factory=Position.initial, init=False)
    phase: GamePhase = field(default=GamePhase.AWAITING_MOVE, init=False)
    history: list[MoveOutcome] = field(default_factory=list, init=False)
    _undo_stack: list[Position] = field(default_factory=list, init=False, repr=False)
    _pending: _PendingPromotion | None = field(default=None, init=False, repr=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, position: Position | None = None) -> None:
        """Initialise (or reset) the game, by default to the standard start."""
        self.position = position if position is not None else Position.initial()
        self.phase = GamePhase.AWAITING_MOVE
        self.history.clear()
        self._undo_stack.clear()
        self._pending = None

    # ── Move application ─────────────────────────────────────────────────

    def propose_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Validate and apply the move of the piece on *from_sq*.

        Returns the outcome. A pawn reaching the last rank leaves the game in
        ``AWAITING_PROMOTION`` with the turn unchanged until
        :meth:`resolve_promotion` is called.

        Raises:
            ValueError: a square index is off the board.
            PromotionPendingError: a promotion choice is still outstanding.
            IllegalMoveError: the move breaks a movement rule or turn order.
            SelfCheckError: the move would leave the mover's king attacked.
        """
        for sq in (from_sq, to_sq):
            if not is_valid_square(sq):
                raise ValueError(f"Invalid square index: {sq!r}")
        if self.phase == GamePhase.AWAITING_PROMOTION:
            raise PromotionPendingError("Choose a promotion piece first")

        position = self.position
        piece = position.board[from_sq]
        if piece is None:
            raise IllegalMoveError(
                from_sq, to_sq, f"no piece on {square_name(from_sq)}"
            )
        if piece.color != position.side_to_move:
            raise IllegalMoveError(
                from_sq, to_sq, f"it is {position.side_to_move}'s turn"
            )

        evaluator = MoveEvaluator(position.board)
        flag = evaluator.classify(from_sq, to_sq)
        if flag is None:
            raise IllegalMoveError(
                from_sq, to_sq, f"{piece.piece_type} cannot move there"
            )

        move = Move(from_sq, to_sq, flag)
        before = position.copy()
        placement = position.place(move)
        if evaluator.is_in_check(piece.color):
            position.restore(placement)
            raise SelfCheckError(from_sq, to_sq)

        position.finalize(move)

        if flag == MoveFlag.PROMOTION:
            self._pending = _PendingPromotion(move, placement, before)
            self.phase = GamePhase.AWAITING_PROMOTION
            return self._outcome(move, piece, placement, pending=True)

        return self._commit(move, piece, placement, before)

    def resolve_promotion(self, piece_type: PieceType) -> MoveOutcome:
        """Finish a pending promotion with *piece_type* and pass the turn."""
        pending = self._pending
        if pending is None:
            raise PromotionPendingError("No promotion is pending")

        to_sq = pending.move.to_sq
        pawn = self.position.board[to_sq]
        self.position.promote(to_sq, piece_type)
        move = Move(pending.move.from_sq, to_sq, MoveFlag.PROMOTION, piece_type)
        self._pending = None
        self.phase = GamePhase.AWAITING_MOVE
        assert pawn is not None
        return self._commit(move, pawn, pending.placement, pending.before)

    def cancel_promotion(self) -> Move | None:
        """Take back a pawn move that is waiting for its promotion piece."""
        pending = self._pending
        if pending is None:
            return None
        self.position = pending.before
        self._pending = None
        self.phase = GamePhase.AWAITING_MOVE
        return pending.move

    def undo_last_move(self) -> MoveOutcome | None:
        """Undo the last committed move. Returns its outcome, or None if empty.

        A pending promotion is cancelled instead and ``None`` is returned.
        """
        if self._pending is not None:
            self.cancel_promotion()
            return None
        if not self.history:
            return None
        self.position = self._undo_stack.pop()
        return self.history.pop()

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def en_passant(self) -> Square | None:
        return self.position.en_passant

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.history)

    @property
    def last_outcome(self) -> MoveOutcome | None:
        return self.history[-1] if self.history else None

    @property
    def pending_promotion(self) -> Move | None:
        return self._pending.move if self._pending is not None else None

    def is_in_check(self, color: Color | None = None) -> bool:
        color = self.side_to_move if color is None else color
        return MoveEvaluator(self.position.board).is_in_check(color)

    def legal_destinations(self, from_sq: Square) -> list[Square]:
        """Squares the piece on *from_sq* may legally move to right now."""
        position = self.position
        piece = position.board[from_sq]
        if (
            self.phase != GamePhase.AWAITING_MOVE
            or piece is None
            or piece.color != position.side_to_move
        ):
            return []

        evaluator = MoveEvaluator(position.board)
        targets: list[Square] = []
        for to_sq in range(64):
            flag = evaluator.classify(from_sq, to_sq)
            if flag is None:
                continue
            placement = position.place(Move(from_sq, to_sq, flag))
            if not evaluator.is_in_check(piece.color):
                targets.append(to_sq)
            position.restore(placement)
        return targets

    # ── Internal ─────────────────────────────────────────────────────────

    def _commit(
        self, move: Move, piece: Piece, placement: Placement, before: Position
    ) -> MoveOutcome:
        self.position.pass_turn()
        outcome = self._outcome(move, piece, placement)
        self._undo_stack.append(before)
        self.history.append(outcome)
        return outcome

    def _outcome(
        self,
        move: Move,
        piece: Piece,
        placement: Placement,
        *,
        pending: bool = False,
    ) -> MoveOutcome:
        opponent = piece.color.opposite
        check = not pending and MoveEvaluator(self.position.board).is_in_check(
            opponent
        )
        return MoveOutcome(
            move=move,
            color=piece.color,
            piece_type=piece.piece_type,
            captured=placement.captured,
            captured_sq=placement.captured_sq,
            rook_move=placement.rook_move,
            promotion=move.promotion,
            pending_promotion=pending,
            check=check,
        )
