"""Exceptions raised when a move attempt is refused.

Rule rejections derive from :class:`MoveRejectedError`. Malformed input
(bad square names, off-board indexes, non-promotable piece kinds) raises
plain :class:`ValueError` instead, so callers can tell them apart.
"""

from __future__ import annotations

from hotseat.core.types import Square, square_name


class MoveRejectedError(Exception):
    """A move attempt broke a rule; the position is unchanged."""

    def __init__(self, from_sq: Square, to_sq: Square, reason: str) -> None:
        self.from_sq = from_sq
        self.to_sq = to_sq
        self.reason = reason
        super().__init__(f"{square_name(from_sq)}{square_name(to_sq)}: {reason}")


class IllegalMoveError(MoveRejectedError):
    """Wrong turn, empty origin, bad geometry, blocked path or friendly target."""


class SelfCheckError(MoveRejectedError):
    """The move would leave the mover's own king attacked."""

    def __init__(self, from_sq: Square, to_sq: Square) -> None:
        super().__init__(from_sq, to_sq, "leaves own king in check")


class PromotionPendingError(RuntimeError):
    """The session is (or is not) waiting for a promotion choice."""
