"""MainWindow — top-level window assembling the board and game controls."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QLabel, QMainWindow, QStatusBar, QToolBar

from hotseat.core.enums import PieceType
from hotseat.core.errors import MoveRejectedError, PromotionPendingError
from hotseat.game.controller import GameController
from hotseat.game.interfaces import GamePhase
from hotseat.game.state import MoveOutcome
from hotseat.ui.board.board_view import BoardView
from hotseat.ui.dialogs.promotion_dialog import PromotionDialog
from hotseat.ui.settings import AppSettings
from hotseat.ui.styles.theme import BoardTheme

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window: one board, two players taking turns."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Hotseat Chess")
        self.setMinimumSize(480, 520)
        self.resize(720, 780)

        self._controller = GameController()
        self._settings = settings if settings is not None else AppSettings()

        self._setup_ui()
        self._connect_signals()
        self.apply_settings()
        self._controller.reset_game()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    # ── Setup ────────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        self._board_view = BoardView(self)
        self.setCentralWidget(self._board_view)

        toolbar = QToolBar("Game", self)
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self._new_game_action = QAction("New game", self)
        self._new_game_action.setShortcut(QKeySequence.StandardKey.New)
        self._undo_action = QAction("Undo", self)
        self._undo_action.setShortcut(QKeySequence.StandardKey.Undo)
        self._flip_action = QAction("Flip board", self)
        self._flip_action.setShortcut("F")
        for action in (self._new_game_action, self._undo_action, self._flip_action):
            toolbar.addAction(action)

        self._status_label = QLabel()
        status_bar = QStatusBar(self)
        status_bar.addWidget(self._status_label, 1)
        self.setStatusBar(status_bar)

    def _connect_signals(self) -> None:
        self._board_view.move_requested.connect(self._on_move_requested)
        self._new_game_action.triggered.connect(self._on_new_game)
        self._undo_action.triggered.connect(self._on_undo)
        self._flip_action.triggered.connect(self._on_flip)

        events = self._controller.events
        events.on_move.append(self._on_move_played)
        events.on_reset.append(lambda _state: self._sync_board(None))
        events.on_phase_changed.append(self._on_phase_changed)

    def apply_settings(self) -> None:
        """Push the current settings to the board."""
        s = self._settings
        scene = self._board_view.board_scene
        scene.set_theme(BoardTheme.by_name(s.board_theme))
        scene.set_show_coordinates(s.show_coordinates)
        scene.set_show_legal_moves(s.show_legal_moves)
        scene.set_flipped(s.flipped)

    # ── Handlers ─────────────────────────────────────────────────────────

    def _on_move_requested(self, from_sq: int, to_sq: int) -> None:
        try:
            outcome = self._controller.propose_move(from_sq, to_sq)
        except MoveRejectedError as exc:
            self._show_status(f"Illegal move: {exc.reason}")
            return
        except PromotionPendingError as exc:
            self._show_status(str(exc))
            return

        if not outcome.pending_promotion:
            return

        # Show the pawn on its new square while the choice is made.
        self._board_view.board_scene.refresh()
        choice = self._choose_promotion(outcome)
        if choice is None:
            self._controller.cancel_promotion()
            self._sync_board(self._controller.state.last_outcome)
            self._show_status("Promotion cancelled")
            return
        self._controller.resolve_promotion(choice)

    def _choose_promotion(self, outcome: MoveOutcome) -> PieceType | None:
        if self._settings.always_promote_to_queen:
            return PieceType.QUEEN
        return PromotionDialog.ask(outcome.color, self)

    def _on_move_played(self, outcome: MoveOutcome) -> None:
        self._sync_board(outcome)

    def _on_phase_changed(self, phase: GamePhase) -> None:
        self._board_view.board_scene.set_interactive(
            phase == GamePhase.AWAITING_MOVE
        )

    def _on_new_game(self) -> None:
        self._controller.reset_game()

    def _on_undo(self) -> None:
        if not self._controller.undo_move():
            self._show_status("Nothing to undo")
            return
        self._sync_board(self._controller.state.last_outcome)

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        self._settings.flipped = not scene.is_flipped()
        scene.set_flipped(self._settings.flipped)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _sync_board(self, last: MoveOutcome | None) -> None:
        scene = self._board_view.board_scene
        scene.set_state(self._controller.state)
        scene.highlight_last_move(last)
        self._update_status()

    def _update_status(self) -> None:
        state = self._controller.state
        text = f"{str(state.side_to_move).capitalize()} to move"
        if state.is_in_check():
            text += " (check)"
        self._show_status(text)

    def _show_status(self, text: str) -> None:
        _LOGGER.debug("Status: %s", text)
        self._status_label.setText(text)
