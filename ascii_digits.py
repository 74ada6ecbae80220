#!/usr/bin/env python3
"""
Block-letter digits for the terminal clock.
Each glyph is a 7x7 block; unsupported characters render blank.
"""

from typing import Dict, List

GLYPH_WIDTH = 7
GLYPH_HEIGHT = 7

# Seven-segment inspired block digits
DIGITS: Dict[str, List[str]] = {
    '0': [
        "███████",
        "██   ██",
        "██   ██",
        "██   ██",
        "██   ██",
        "██   ██",
        "███████"
    ],
    '1': [
        "   ██  ",
        "  ███  ",
        "   ██  ",
        "   ██  ",
        "   ██  ",
        "   ██  ",
        "███████"
    ],
    '2': [
        "███████",
        "     ██",
        "     ██",
        "███████",
        "██     ",
        "██     ",
        "███████"
    ],
    '3': [
        "███████",
        "     ██",
        "     ██",
        "███████",
        "     ██",
        "     ██",
        "███████"
    ],
    '4': [
        "██   ██",
        "██   ██",
        "██   ██",
        "███████",
        "     ██",
        "     ██",
        "     ██"
    ],
    '5': [
        "███████",
        "██     ",
        "██     ",
        "███████",
        "     ██",
        "     ██",
        "███████"
    ],
    '6': [
        "███████",
        "██     ",
        "██     ",
        "███████",
        "██   ██",
        "██   ██",
        "███████"
    ],
    '7': [
        "███████",
        "     ██",
        "     ██",
        "     ██",
        "     ██",
        "     ██",
        "     ██"
    ],
    '8': [
        "███████",
        "██   ██",
        "██   ██",
        "███████",
        "██   ██",
        "██   ██",
        "███████"
    ],
    '9': [
        "███████",
        "██   ██",
        "██   ██",
        "███████",
        "     ██",
        "     ██",
        "███████"
    ],
    ':': [
        "       ",
        "   ██  ",
        "   ██  ",
        "       ",
        "   ██  ",
        "   ██  ",
        "       "
    ],
}

BLANK_GLYPH = [" " * GLYPH_WIDTH] * GLYPH_HEIGHT


def get_glyph(char: str) -> List[str]:
    """Return the 7 rows for a clock character, blank if unsupported"""
    return list(DIGITS.get(char, BLANK_GLYPH))


def render_time_display(time_str: str) -> List[str]:
    """Render the time string using ASCII art digits"""
    lines = [""] * GLYPH_HEIGHT

    for char in time_str:
        digit_lines = get_glyph(char)
        for i in range(GLYPH_HEIGHT):
            lines[i] += digit_lines[i] + " "

    return lines

