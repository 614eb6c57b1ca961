"""Squares and coordinate helpers.

A square is an ``int`` from 0 to 63, file-major within each rank::

    a1=0  b1=1  ... h1=7
    a2=8  ...        h2=15
    ...
    a8=56 ...        h8=63

Everything inside the engine works on these ints. Algebraic names such as
``"e4"`` are parsed or produced only where input arrives or text leaves.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int

FILES = "abcdefgh"
RANKS = "12345678"

SQUARE_NAMES: tuple[str, ...] = tuple(f + r for r in RANKS for f in FILES)
_INDEX_BY_NAME: dict[str, Square] = {name: i for i, name in enumerate(SQUARE_NAMES)}


def file_of(sq: Square) -> int:
    """0 for the a-file up to 7 for the h-file."""
    return sq % 8


def rank_of(sq: Square) -> int:
    """0 for the first rank up to 7 for the eighth."""
    return sq // 8


def is_valid_square(sq: object) -> bool:
    return isinstance(sq, int) and not isinstance(sq, bool) and 0 <= sq < 64


def make_square(file: int, rank: int) -> Square:
    if file not in range(8) or rank not in range(8):
        raise ValueError(f"Coordinates off the board: file={file}, rank={rank}")
    return rank * 8 + file


def square_name(sq: Square) -> str:
    """Algebraic name, 28 -> ``"e4"``."""
    if not is_valid_square(sq):
        raise ValueError(f"Invalid square index: {sq!r}")
    return SQUARE_NAMES[sq]


def parse_square(name: str) -> Square:
    """Square for an algebraic name, ``"e4"`` -> 28.

    Only lowercase file letters are accepted.
    """
    try:
        return _INDEX_BY_NAME[name]
    except (KeyError, TypeError):
        raise ValueError(f"Invalid square name: {name!r}") from None


# ── Named squares ───────────────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = range(0, 8)
A2, B2, C2, D2, E2, F2, G2, H2 = range(8, 16)
A3, B3, C3, D3, E3, F3, G3, H3 = range(16, 24)
A4, B4, C4, D4, E4, F4, G4, H4 = range(24, 32)
A5, B5, C5, D5, E5, F5, G5, H5 = range(32, 40)
A6, B6, C6, D6, E6, F6, G6, H6 = range(40, 48)
A7, B7, C7, D7, E7, F7, G7, H7 = range(48, 56)
A8, B8, C8, D8, E8, F8, G8, H8 = range(56, 64)
