"""BoardView — keeps the board scene square and scaled to the widget."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QKeyEvent, QPainter, QResizeEvent
from PyQt6.QtWidgets import QFrame, QGraphicsView, QSizePolicy, QWidget

from hotseat.ui.board.board_scene import BoardScene


class BoardView(QGraphicsView):
    """View onto a :class:`BoardScene`.

    ``move_requested(int, int)`` is re-emitted from the scene so the window
    only has to connect to the view. Escape drops the current selection.
    """

    move_requested = pyqtSignal(int, int)

    def __init__(self, parent: QWidget | None = None) -> None:
        scene = BoardScene()
        super().__init__(scene, parent)
        self._scene = scene

        self.setFrameShape(QFrame.Shape.NoFrame)
        for policy_setter in (
            self.setHorizontalScrollBarPolicy,
            self.setVerticalScrollBarPolicy,
        ):
            policy_setter(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setRenderHints(
            QPainter.RenderHint.Antialiasing | QPainter.RenderHint.TextAntialiasing
        )
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(8 * 40, 8 * 40)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        scene.move_requested.connect(self.move_requested)

    @property
    def board_scene(self) -> BoardScene:
        return self._scene

    def keyPressEvent(self, event: QKeyEvent | None) -> None:
        if event is not None and event.key() == Qt.Key.Key_Escape:
            self._scene.clear_selection()
            event.accept()
            return
        super().keyPressEvent(event)

    def resizeEvent(self, event: QResizeEvent | None) -> None:
        super().resizeEvent(event)
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)
