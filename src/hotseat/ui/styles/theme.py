"""Board colour schemes and the application style sheet."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor

# name -> (light square, dark square); overlays are shared by every scheme
_PALETTES: dict[str, tuple[tuple[int, int, int], tuple[int, int, int]]] = {
    "Classic": ((238, 216, 180), (175, 131, 94)),
    "Blue": ((220, 228, 234), (120, 150, 176)),
    "Green": ((234, 236, 214), (106, 145, 98)),
}

THEME_NAMES: tuple[str, ...] = tuple(_PALETTES)


@dataclass(frozen=True)
class BoardTheme:
    """Colours used by the board scene."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # selected piece
    highlight_to: QColor  # legal destination dots
    highlight_check: QColor
    last_move: QColor
    coord_light: QColor  # label drawn on a dark square
    coord_dark: QColor  # label drawn on a light square
    piece_white: QColor
    piece_black: QColor

    @classmethod
    def from_palette(cls, light: QColor, dark: QColor) -> BoardTheme:
        """Scheme built around two square colours."""
        return cls(
            light_square=light,
            dark_square=dark,
            highlight_from=QColor(246, 246, 105, 110),
            highlight_to=QColor(20, 20, 20, 50),
            highlight_check=QColor(220, 40, 40, 130),
            last_move=QColor(170, 200, 60, 100),
            coord_light=light,
            coord_dark=dark,
            piece_white=QColor(250, 250, 250),
            piece_black=QColor(24, 24, 24),
        )

    @classmethod
    def by_name(cls, name: str) -> BoardTheme:
        """Scheme for a settings name; unknown names give Classic."""
        light, dark = _PALETTES.get(name, _PALETTES["Classic"])
        return cls.from_palette(QColor(*light), QColor(*dark))

    @classmethod
    def default(cls) -> BoardTheme:
        return cls.by_name("Classic")


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #262626;
}

QToolBar {
    background: #262626;
    border: none;
    spacing: 4px;
}
QToolButton {
    color: #dddddd;
    padding: 4px 12px;
    border-radius: 3px;
}
QToolButton:hover {
    background: #3a3a3a;
}

QStatusBar, QStatusBar QLabel {
    color: #dddddd;
    font-size: 13px;
}

QDialog {
    background: #2e2e2e;
}
QDialog QLabel {
    color: #dddddd;
}
QDialog QPushButton {
    background: #f0f0f0;
    border: 1px solid #777777;
    border-radius: 6px;
}
QDialog QPushButton:hover {
    background: #ffe98a;
}
"""
