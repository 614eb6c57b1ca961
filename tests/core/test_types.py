"""Tests for square helpers, enums and pieces."""

import pytest

from hotseat.core.enums import Color, PieceType
from hotseat.core.piece import Piece
from hotseat.core.types import (
    A1,
    E4,
    H8,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)


class TestSquares:
    def test_parse_corners(self) -> None:
        assert parse_square("a1") == A1 == 0
        assert parse_square("h8") == H8 == 63

    def test_parse_e4(self) -> None:
        sq = parse_square("e4")
        assert sq == E4
        assert file_of(sq) == 4
        assert rank_of(sq) == 3

    def test_square_name(self) -> None:
        assert square_name(E4) == "e4"
        assert square_name(make_square(7, 0)) == "h1"

    @pytest.mark.parametrize("name", ["", "e", "e9", "i1", "E4", "e44", "4e"])
    def test_parse_rejects_malformed(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid square name"):
            parse_square(name)

    def test_square_name_rejects_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            square_name(64)

    def test_make_square_rejects_off_board(self) -> None:
        with pytest.raises(ValueError):
            make_square(8, 0)


class TestColor:
    def test_opposite(self) -> None:
        assert Color.WHITE.opposite == Color.BLACK
        assert Color.BLACK.opposite == Color.WHITE

    def test_forward_and_ranks(self) -> None:
        assert Color.WHITE.forward == 1
        assert Color.BLACK.forward == -1
        assert Color.WHITE.promotion_rank == 7
        assert Color.BLACK.promotion_rank == 0

    def test_str(self) -> None:
        assert str(Color.WHITE) == "white"


class TestPiece:
    def test_from_char(self) -> None:
        piece = Piece.from_char("n")
        assert piece.color == Color.BLACK
        assert piece.piece_type == PieceType.KNIGHT
        assert str(piece) == "n"

    def test_from_char_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            Piece.from_char("x")

    def test_symbol(self) -> None:
        assert Piece(Color.WHITE, PieceType.KING).symbol == "♔"

    def test_pawn_flags(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        assert pawn.can_double_move
        assert not pawn.can_castle
        pawn.mark_moved()
        assert not pawn.can_double_move

    def test_castling_flags(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK)
        king = Piece(Color.WHITE, PieceType.KING)
        queen = Piece(Color.WHITE, PieceType.QUEEN)
        assert rook.can_castle and king.can_castle
        assert not queen.can_castle
        assert not rook.can_double_move
        rook.mark_moved()
        assert not rook.can_castle

    def test_en_passant_only_for_pawns(self) -> None:
        knight = Piece(Color.BLACK, PieceType.KNIGHT)
        with pytest.raises(ValueError):
            knight.mark_en_passant()
        pawn = Piece(Color.BLACK, PieceType.PAWN)
        pawn.mark_en_passant()
        assert pawn.en_passant_eligible
        pawn.clear_en_passant()
        assert not pawn.en_passant_eligible

    def test_equality_includes_flags(self) -> None:
        a = Piece(Color.WHITE, PieceType.PAWN)
        b = Piece(Color.WHITE, PieceType.PAWN)
        assert a == b
        b.mark_en_passant()
        assert a != b

    def test_copy_is_independent(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        pawn.mark_en_passant()
        clone = pawn.copy()
        assert clone == pawn and clone is not pawn
        clone.clear_en_passant()
        assert pawn.en_passant_eligible
