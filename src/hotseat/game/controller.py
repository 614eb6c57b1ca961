"""GameController — the single entry point callers use to play a game.

Coordinates: GameState, the promotion-choice collaborator and listeners.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from hotseat.core.enums import PieceType
from hotseat.core.errors import MoveRejectedError
from hotseat.core.types import Square, parse_square
from hotseat.game.interfaces import GamePhase, PromotionChooser
from hotseat.game.state import GameState, MoveOutcome

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveOutcome], None]
PhaseCallback = Callable[[GamePhase], None]
ResetCallback = Callable[[GameState], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_pending: list[MoveCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates and applies moves for two players sharing one device.

    Thread-safety: every public method holds one re-entrant lock for the
    whole game, so the controller may be driven from more than one thread.
    Callbacks run while the lock is held.

    Args:
        choose_promotion: ``(Color) -> PieceType | None``, asked once per
            promotion by :meth:`attempt_move` / :meth:`submit_move`.
            Without one (or when it answers ``None``) pawns become queens.
    """

    __slots__ = ("_state", "_choose_promotion", "_lock", "events")

    def __init__(self, choose_promotion: PromotionChooser | None = None) -> None:
        self._state = GameState()
        self._choose_promotion = choose_promotion
        self._lock = threading.RLock()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    def set_promotion_chooser(self, chooser: PromotionChooser | None) -> None:
        self._choose_promotion = chooser

    # ── Game lifecycle ───────────────────────────────────────────────────

    def reset_game(self) -> GameState:
        """Start over from the standard position with white to move."""
        with self._lock:
            self._state.setup()
            _LOGGER.info("New game started")
            for cb in self.events.on_reset:
                cb(self._state)
            self._emit_phase(GamePhase.AWAITING_MOVE)
            return self._state

    def undo_move(self) -> bool:
        """Take back the last move (or a pending promotion)."""
        with self._lock:
            pending = self._state.pending_promotion is not None
            undone = self._state.undo_last_move()
            if undone is None and not pending:
                return False
            _LOGGER.info("Undid %s", undone if undone is not None else "promotion")
            self._emit_phase(GamePhase.AWAITING_MOVE)
            return True

    # ── Moves ────────────────────────────────────────────────────────────

    def attempt_move(self, from_square: str, to_square: str) -> MoveOutcome:
        """Play a move given in algebraic squares, e.g. ``("e2", "e4")``.

        Raises:
            ValueError: a square name is malformed.
            MoveRejectedError: the move is illegal or leaves the king in check.

        Errors from the promotion chooser, or a piece it picks that cannot
        be promoted to, propagate with the pawn move already taken back.
        """
        return self.submit_move(parse_square(from_square), parse_square(to_square))

    def submit_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """Play a move, settling any promotion through the chooser."""
        with self._lock:
            outcome = self.propose_move(from_sq, to_sq)
            if not outcome.pending_promotion:
                return outcome

            # A failed choice takes the pawn move back before re-raising.
            try:
                choice = None
                if self._choose_promotion is not None:
                    choice = self._choose_promotion(outcome.color)
                return self.resolve_promotion(choice or PieceType.QUEEN)
            except BaseException:
                _LOGGER.warning("Promotion choice failed, withdrawing %s", outcome)
                self.cancel_promotion()
                raise

    def propose_move(self, from_sq: Square, to_sq: Square) -> MoveOutcome:
        """First phase of a move: validate and apply it.

        The outcome has ``pending_promotion`` set when a pawn reached the
        last rank; finish it with :meth:`resolve_promotion`.
        """
        with self._lock:
            try:
                outcome = self._state.propose_move(from_sq, to_sq)
            except MoveRejectedError as exc:
                _LOGGER.debug("Rejected move %s", exc)
                raise

            if outcome.pending_promotion:
                for cb in self.events.on_promotion_pending:
                    cb(outcome)
                self._emit_phase(GamePhase.AWAITING_PROMOTION)
            else:
                self._emit_move(outcome)
            return outcome

    def resolve_promotion(self, piece_type: PieceType) -> MoveOutcome:
        """Second phase of a promotion: swap in *piece_type*, pass the turn."""
        with self._lock:
            outcome = self._state.resolve_promotion(piece_type)
            self._emit_phase(GamePhase.AWAITING_MOVE)
            self._emit_move(outcome)
            return outcome

    def cancel_promotion(self) -> bool:
        """Withdraw the pawn move that is waiting for a promotion choice."""
        with self._lock:
            move = self._state.cancel_promotion()
            if move is None:
                return False
            _LOGGER.debug("Promotion on %s cancelled", move)
            self._emit_phase(GamePhase.AWAITING_MOVE)
            return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_move(self, outcome: MoveOutcome) -> None:
        _LOGGER.info("%s played %s", outcome.color, outcome)
        for cb in self.events.on_move:
            cb(outcome)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
