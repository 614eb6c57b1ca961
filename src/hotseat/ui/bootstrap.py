"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

_LOGGER = logging.getLogger(__name__)
_LOG_LEVEL_ENV = "HOTSEAT_LOG_LEVEL"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level_name: str | None = None) -> int:
    """Install a root handler at *level_name* (or ``$HOTSEAT_LOG_LEVEL``)."""
    name = (level_name or os.environ.get(_LOG_LEVEL_ENV) or "WARNING").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.WARNING
        logging.basicConfig(level=level, format=_LOG_FORMAT)
        _LOGGER.warning("Unknown log level %r, using WARNING", name)
        return level
    logging.basicConfig(level=level, format=_LOG_FORMAT)
    return level


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from hotseat.ui.styles.theme import APP_STYLE

    app.setApplicationName("Hotseat Chess")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(argv: list[str] | None = None) -> int:
    """Create and run the main Qt application."""
    from PyQt6.QtWidgets import QApplication

    from hotseat.ui.main_window import MainWindow
    from hotseat.ui.settings import AppSettings

    configure_logging()
    try:
        settings = AppSettings.from_env()
    except ValueError as exc:
        _LOGGER.warning("Ignoring invalid settings: %s", exc)
        settings = AppSettings()

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    window = MainWindow(settings)
    window.show()

    return app.exec()
