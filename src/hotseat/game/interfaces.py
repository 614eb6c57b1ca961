"""Game-layer enums and collaborator signatures."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum, auto

from hotseat.core.enums import Color, PieceType

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states of a game session."""

    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()  # pawn on the last rank, piece not chosen yet


# ── External collaborators ───────────────────────────────────────────────────

# Asked once per promotion; ``None`` means "no preference" (queen).
PromotionChooser = Callable[[Color], PieceType | None]
