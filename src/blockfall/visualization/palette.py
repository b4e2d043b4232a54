from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

BACKGROUND: Color = (11, 12, 16)
EMPTY: Color = (30, 30, 36)

# Keyed by cell value; the falling piece is drawn from the negated value
PALETTE = {
    0: EMPTY,
    1: (0, 240, 240),  # I
    2: (240, 240, 0),  # O
    3: (160, 0, 240),  # T
    4: (0, 0, 240),    # J
    5: (240, 160, 0),  # L
    6: (0, 240, 0),    # S
    7: (240, 0, 0),    # Z
}


def color_for_value(v: int) -> Color:
    return PALETTE.get(abs(int(v)), (200, 200, 200))


def hex_to_rgb(value: str) -> Color:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)
