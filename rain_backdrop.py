#!/usr/bin/env python3
"""
Animated rain and street-lamp backdrop.

The backdrop is a pure function of the frame counter and the screen size,
so the same (frame, width, height) always yields the same rows.
"""

import math
from typing import List

LAMP_COLUMN = 5
POLE_SPAN = (2, 8)
GLOW_SPAN = (3, 7)
GLOW_THRESHOLD = 0.3

FRAME_MASK = 0xFFFFFFFF


def lamp_glow(frame: int) -> float:
    """Lamp brightness in [0, 1], pulsing with the frame counter."""
    return math.sin(frame * 0.1) * 0.5 + 0.5


def wind_offset(frame: int) -> int:
    # int() truncates toward zero, giving offsets in -2..2
    return int(math.sin(frame * 0.05) * 2.0)


def _rain_char(frame: int, x: int, y: int, wind: int) -> str:
    rain_pos = (x + y + wind + frame // 3) % 7
    drift = (frame + x) & FRAME_MASK
    if rain_pos == 0 and drift % 13 == 0:
        return '·'
    if rain_pos == 1 and drift % 17 == 0:
        return '`'
    return ' '


def generate_animated_background(frame: int, width: int, height: int) -> List[str]:
    """Build `height` rows of `width` backdrop characters for one frame.

    Rows from the bottom: the lamp pole sits on ``height - 3``, the glow on
    ``height - 4`` and the rain field covers everything above ``height - 5``.
    """
    pole_row = height - 3
    glow_row = height - 4
    bright = lamp_glow(frame) > GLOW_THRESHOLD
    wind = wind_offset(frame)

    background = []
    for y in range(height):
        line = []
        for x in range(width):
            if y == pole_row and POLE_SPAN[0] <= x <= POLE_SPAN[1]:
                char = '│' if x == LAMP_COLUMN else ' '
            elif y == glow_row and GLOW_SPAN[0] <= x <= GLOW_SPAN[1]:
                if bright:
                    char = '●' if x == LAMP_COLUMN else '·'
                else:
                    char = '○' if x == LAMP_COLUMN else ' '
            elif y < height - 5:
                char = _rain_char(frame, x, y, wind)
            else:
                char = ' '
            line.append(char)
        background.append("".join(line))

    return background
