"""User-configurable presentation settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields

from hotseat.ui.styles.theme import THEME_NAMES

_ENV_PREFIX = "HOTSEAT_"
_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Board
    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_legal_moves: bool = True
    flipped: bool = False

    # Promotion
    always_promote_to_queen: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Defaults overridden by ``HOTSEAT_<FIELD>`` environment variables.

        e.g. ``HOTSEAT_BOARD_THEME=Blue`` or ``HOTSEAT_FLIPPED=1``.
        """
        env = os.environ if environ is None else environ
        settings = cls()
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.type in (bool, "bool"):
                setattr(settings, f.name, _parse_bool(f.name, raw))
            else:
                setattr(settings, f.name, raw.strip())

        if settings.board_theme not in THEME_NAMES:
            raise ValueError(
                f"Unknown board theme {settings.board_theme!r}; "
                f"expected one of {', '.join(THEME_NAMES)}"
            )
        return settings


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {name}: {raw!r}")
