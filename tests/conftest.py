"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from hotseat.core.board import Board
from hotseat.core.enums import Color, PieceType
from hotseat.core.piece import Piece
from hotseat.core.position import Position
from hotseat.core.types import file_of, parse_square, rank_of

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


PositionFactory = Callable[..., Position]


def _on_home_square(piece: Piece, sq: int) -> bool:
    rank = rank_of(sq)
    home = piece.color.home_rank
    if piece.piece_type == PieceType.PAWN:
        return rank == home + piece.color.forward
    if piece.piece_type == PieceType.KING:
        return rank == home and file_of(sq) == 4
    if piece.piece_type == PieceType.ROOK:
        return rank == home and file_of(sq) in (0, 7)
    return rank == home


def build_position(
    pieces: dict[str, str],
    side_to_move: Color = Color.WHITE,
) -> Position:
    """Position from ``{"e1": "K", "e8": "k", ...}``.

    Pieces on their starting squares count as never moved, all others as
    moved, which is what a real game would have produced.
    """
    board = Board()
    for name, char in pieces.items():
        sq = parse_square(name)
        piece = Piece.from_char(char)
        piece.has_moved = not _on_home_square(piece, sq)
        board[sq] = piece
    return Position(board, side_to_move)


@pytest.fixture
def make_position() -> PositionFactory:
    """Factory fixture around :func:`build_position`."""
    return build_position


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _cleanup_qt_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Ensure UI tests do not leak top-level widgets into the next test."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()
