"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from hotseat.core import MoveEvaluator, Position, parse_square

    pos = Position.initial()
    evaluator = MoveEvaluator(pos.board)
    evaluator.is_legal(parse_square("e2"), parse_square("e4"))
"""

from hotseat.core.board import Board
from hotseat.core.enums import PROMOTION_TYPES, Color, MoveFlag, PieceType
from hotseat.core.errors import (
    IllegalMoveError,
    MoveRejectedError,
    PromotionPendingError,
    SelfCheckError,
)
from hotseat.core.evaluator import MoveEvaluator
from hotseat.core.move import Move
from hotseat.core.paths import is_blocked, squares_between
from hotseat.core.piece import Piece
from hotseat.core.position import Placement, Position
from hotseat.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "MoveFlag",
    "PieceType",
    "PROMOTION_TYPES",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    "is_blocked",
    "squares_between",
    # Domain objects
    "Board",
    "Move",
    "MoveEvaluator",
    "Piece",
    "Placement",
    "Position",
    # Errors
    "IllegalMoveError",
    "MoveRejectedError",
    "PromotionPendingError",
    "SelfCheckError",
]
