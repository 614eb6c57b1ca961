"""Path clearance between two squares on a shared line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hotseat.core.types import Square, file_of, rank_of

if TYPE_CHECKING:
    from hotseat.core.board import Board


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def step_between(start: Square, end: Square) -> tuple[int, int] | None:
    """Unit (file, rank) step from *start* towards *end*.

    Returns ``None`` unless the squares share a rank, file or diagonal.
    """
    df = file_of(end) - file_of(start)
    dr = rank_of(end) - rank_of(start)
    if df == 0 and dr == 0:
        return None
    if df != 0 and dr != 0 and abs(df) != abs(dr):
        return None
    return _sign(df), _sign(dr)


def squares_between(start: Square, end: Square) -> list[Square] | None:
    """Squares strictly between *start* and *end*, or ``None`` if not aligned."""
    if start == end:
        return []
    step = step_between(start, end)
    if step is None:
        return None
    delta = step[1] * 8 + step[0]
    return list(range(start + delta, end, delta))


def is_blocked(board: Board, start: Square, end: Square) -> bool:
    """Whether any piece stands strictly between *start* and *end*.

    Non-aligned pairs (a knight's jump, for instance) count as blocked;
    legality checks only ask about lines.
    """
    between = squares_between(start, end)
    if between is None:
        return True
    return any(board[sq] is not None for sq in between)
