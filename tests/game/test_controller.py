"""Tests for GameController — the entry point the UI drives."""

import logging
import threading

import pytest

from hotseat.core.enums import Color, PieceType
from hotseat.core.errors import IllegalMoveError, MoveRejectedError, SelfCheckError
from hotseat.core.position import Position
from hotseat.core.types import parse_square
from hotseat.game.controller import GameController
from hotseat.game.interfaces import GamePhase
from hotseat.game.state import MoveOutcome


def _make_controller(position: Position | None = None, **kwargs) -> GameController:
    ctrl = GameController(**kwargs)
    ctrl.reset_game()
    if position is not None:
        ctrl.state.setup(position)
    return ctrl


class TestAttemptMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_controller()
        outcome = ctrl.attempt_move("e2", "e4")
        assert outcome.move.to_sq == parse_square("e4")
        assert ctrl.state.side_to_move == Color.BLACK

    def test_illegal_move_rejected(self) -> None:
        ctrl = _make_controller()
        with pytest.raises(IllegalMoveError):
            ctrl.attempt_move("e2", "e5")
        assert ctrl.state.position == Position.initial()

    @pytest.mark.parametrize(
        ("from_square", "to_square"),
        [("e2", "e9"), ("z2", "e4"), ("", "e4"), ("e2", "E4")],
    )
    def test_malformed_square_is_value_error(
        self, from_square: str, to_square: str
    ) -> None:
        ctrl = _make_controller()
        with pytest.raises(ValueError):
            ctrl.attempt_move(from_square, to_square)
        assert ctrl.state.ply_count == 0

    def test_self_check_is_distinguishable(self, make_position) -> None:
        ctrl = _make_controller(
            make_position({"e1": "K", "e2": "N", "e8": "r", "a8": "k"})
        )
        with pytest.raises(SelfCheckError) as info:
            ctrl.attempt_move("e2", "c3")
        assert isinstance(info.value, MoveRejectedError)
        assert not isinstance(info.value, ValueError)

    def test_short_game(self) -> None:
        ctrl = _make_controller()
        for from_square, to_square in [
            ("e2", "e4"), ("e7", "e5"),
            ("g1", "f3"), ("b8", "c6"),
            ("f1", "c4"), ("g8", "f6"),
            ("e1", "g1"),
        ]:
            ctrl.attempt_move(from_square, to_square)
        last = ctrl.state.last_outcome
        assert last is not None and last.is_castle
        assert ctrl.state.ply_count == 7

    @pytest.mark.parametrize(
        ("origin", "target"),
        [(f + "2", f + r) for f in "abcdefgh" for r in "34"]
        + [("b1", "a3"), ("b1", "c3"), ("g1", "f3"), ("g1", "h3")],
    )
    def test_every_opening_move(self, origin: str, target: str) -> None:
        ctrl = _make_controller()
        outcome = ctrl.attempt_move(origin, target)
        assert outcome.color == Color.WHITE
        assert ctrl.state.side_to_move == Color.BLACK
        assert ctrl.state.position.board[parse_square(origin)] is None


class TestEvents:
    def test_on_move_fires(self) -> None:
        ctrl = _make_controller()
        received: list[MoveOutcome] = []
        ctrl.events.on_move.append(received.append)
        ctrl.attempt_move("e2", "e4")
        assert len(received) == 1
        assert str(received[0]) == "e2e4"

    def test_rejected_move_emits_nothing(self) -> None:
        ctrl = _make_controller()
        received: list[MoveOutcome] = []
        ctrl.events.on_move.append(received.append)
        with pytest.raises(MoveRejectedError):
            ctrl.attempt_move("e2", "e5")
        assert received == []

    def test_reset_fires(self) -> None:
        ctrl = _make_controller()
        ctrl.attempt_move("e2", "e4")
        resets: list[object] = []
        phases: list[GamePhase] = []
        ctrl.events.on_reset.append(resets.append)
        ctrl.events.on_phase_changed.append(phases.append)
        state = ctrl.reset_game()
        assert resets == [state]
        assert phases == [GamePhase.AWAITING_MOVE]
        assert state.ply_count == 0

    def test_moves_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = _make_controller()
        with caplog.at_level(logging.INFO, logger="hotseat.game.controller"):
            ctrl.attempt_move("e2", "e4")
        assert "white played e2e4" in caplog.text


class TestPromotion:
    PIECES = {"e1": "K", "a8": "k", "e7": "P"}

    def test_default_is_queen(self, make_position) -> None:
        ctrl = _make_controller(make_position(dict(self.PIECES)))
        outcome = ctrl.attempt_move("e7", "e8")
        assert outcome.promotion == PieceType.QUEEN
        assert ctrl.state.side_to_move == Color.BLACK

    def test_chooser_is_asked(self, make_position) -> None:
        asked: list[Color] = []

        def choose(color: Color) -> PieceType:
            asked.append(color)
            return PieceType.KNIGHT

        ctrl = _make_controller(
            make_position(dict(self.PIECES)), choose_promotion=choose
        )
        outcome = ctrl.attempt_move("e7", "e8")
        assert asked == [Color.WHITE]
        assert outcome.promotion == PieceType.KNIGHT

    def test_chooser_without_preference(self, make_position) -> None:
        ctrl = _make_controller(make_position(dict(self.PIECES)))
        ctrl.set_promotion_chooser(lambda color: None)
        outcome = ctrl.attempt_move("e7", "e8")
        assert outcome.promotion == PieceType.QUEEN

    def test_two_phase_events(self, make_position) -> None:
        ctrl = _make_controller(make_position(dict(self.PIECES)))
        pending: list[MoveOutcome] = []
        moves: list[MoveOutcome] = []
        phases: list[GamePhase] = []
        ctrl.events.on_promotion_pending.append(pending.append)
        ctrl.events.on_move.append(moves.append)
        ctrl.events.on_phase_changed.append(phases.append)

        first = ctrl.propose_move(parse_square("e7"), parse_square("e8"))
        assert first.pending_promotion
        assert pending == [first]
        assert moves == []
        assert phases == [GamePhase.AWAITING_PROMOTION]

        final = ctrl.resolve_promotion(PieceType.ROOK)
        assert moves == [final]
        assert phases == [GamePhase.AWAITING_PROMOTION, GamePhase.AWAITING_MOVE]
        assert final.promotion == PieceType.ROOK

    def test_failing_chooser_withdraws_pawn(self, make_position) -> None:
        def choose(color: Color) -> PieceType:
            raise RuntimeError("dialog closed")

        position = make_position(dict(self.PIECES))
        ctrl = _make_controller(position.copy(), choose_promotion=choose)
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)

        with pytest.raises(RuntimeError):
            ctrl.attempt_move("e7", "e8")
        assert ctrl.state.position == position
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert ctrl.state.pending_promotion is None
        assert phases[-1] == GamePhase.AWAITING_MOVE

    def test_refused_choice_withdraws_pawn(self, make_position) -> None:
        position = make_position(dict(self.PIECES))
        ctrl = _make_controller(
            position.copy(), choose_promotion=lambda color: PieceType.KING
        )
        moves: list[MoveOutcome] = []
        ctrl.events.on_move.append(moves.append)

        with pytest.raises(ValueError):
            ctrl.attempt_move("e7", "e8")
        assert ctrl.state.position == position
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert ctrl.state.side_to_move == Color.WHITE
        assert moves == []

        # The game carries on normally afterwards.
        ctrl.set_promotion_chooser(None)
        assert ctrl.attempt_move("e7", "e8").promotion == PieceType.QUEEN

    def test_cancel(self, make_position) -> None:
        ctrl = _make_controller(make_position(dict(self.PIECES)))
        ctrl.propose_move(parse_square("e7"), parse_square("e8"))
        assert ctrl.cancel_promotion()
        assert not ctrl.cancel_promotion()
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert ctrl.state.side_to_move == Color.WHITE


class TestUndo:
    def test_undo_move(self) -> None:
        ctrl = _make_controller()
        ctrl.attempt_move("e2", "e4")
        assert ctrl.undo_move()
        assert ctrl.state.position == Position.initial()

    def test_undo_nothing(self) -> None:
        ctrl = _make_controller()
        assert not ctrl.undo_move()

    def test_undo_pending_promotion(self, make_position) -> None:
        ctrl = _make_controller(make_position({"e1": "K", "a8": "k", "e7": "P"}))
        ctrl.propose_move(parse_square("e7"), parse_square("e8"))
        assert ctrl.undo_move()
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE
        assert ctrl.state.ply_count == 0


class TestThreadSafety:
    def test_competing_submissions(self) -> None:
        ctrl = _make_controller()
        results: list[str] = []
        barrier = threading.Barrier(4)

        def worker() -> None:
            barrier.wait()
            try:
                ctrl.attempt_move("e2", "e4")
            except MoveRejectedError:
                results.append("rejected")
            else:
                results.append("played")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert sorted(results) == ["played", "rejected", "rejected", "rejected"]
        assert ctrl.state.ply_count == 1
