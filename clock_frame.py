#!/usr/bin/env python3
"""
Frame composition for the terminal clock radio.

A frame is built as a Canvas of (character, style role) cells, layered
back to front: rain backdrop, header hint, bordered clock panel, alarm
status footer and, while the dialog is open, the alarm entry popup.
Everything clips to the canvas, so any screen size is safe to draw.
"""

from datetime import datetime
from typing import Iterator, List, NamedTuple, Optional, Tuple

from alarm_state import AppState
from ascii_digits import render_time_display
from rain_backdrop import generate_animated_background

# Style roles, mapped to colours by the display surface
BACKGROUND = "background"
ACCENT = "accent"
TEXT = "text"
POPUP = "popup"
POPUP_TEXT = "popup_text"

HEADER_TEXT = "'a' alarm | 'q' quit"
POPUP_TITLE = "Set Alarm (HH:MM)"
TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%A, %B %d, %Y"

HEADER_HEIGHT = 1
FOOTER_HEIGHT = 3
POPUP_PERCENT_X = 40
POPUP_PERCENT_Y = 20

# Box drawing characters
TOP_LEFT, TOP_RIGHT = "┌", "┐"
BOTTOM_LEFT, BOTTOM_RIGHT = "└", "┘"
HORIZONTAL, VERTICAL = "─", "│"


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def inner(self, margin: int = 1) -> "Rect":
        """The area left inside a border of `margin` cells."""
        width = max(0, self.width - 2 * margin)
        height = max(0, self.height - 2 * margin)
        return Rect(self.x + margin, self.y + margin, width, height)


class Canvas:
    """A width x height grid of characters, each tagged with a style role."""

    def __init__(self, width: int, height: int, role: str = BACKGROUND):
        self.width = max(0, width)
        self.height = max(0, height)
        self.chars = [[" "] * self.width for _ in range(self.height)]
        self.roles = [[role] * self.width for _ in range(self.height)]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def set_cell(self, x: int, y: int, char: str, role: str):
        if 0 <= x < self.width and 0 <= y < self.height:
            self.chars[y][x] = char
            self.roles[y][x] = role

    def put_text(self, x: int, y: int, text: str, role: str, clip: Optional[Rect] = None):
        """Write text left to right, dropping cells outside `clip` and the canvas."""
        clip = clip or self.area
        if not clip.y <= y < clip.bottom:
            return
        for offset, char in enumerate(text):
            col = x + offset
            if clip.x <= col < clip.right:
                self.set_cell(col, y, char, role)

    def fill(self, rect: Rect, char: str = " ", role: str = BACKGROUND):
        for y in range(rect.y, rect.bottom):
            for x in range(rect.x, rect.right):
                self.set_cell(x, y, char, role)

    def draw_box(self, rect: Rect, role: str, title: str = ""):
        """Draw a single-line border around `rect` with an optional title."""
        if rect.width <= 0 or rect.height <= 0:
            return
        last_x, last_y = rect.right - 1, rect.bottom - 1

        for x in range(rect.x, rect.right):
            self.set_cell(x, rect.y, HORIZONTAL, role)
            self.set_cell(x, last_y, HORIZONTAL, role)
        for y in range(rect.y, rect.bottom):
            self.set_cell(rect.x, y, VERTICAL, role)
            self.set_cell(last_x, y, VERTICAL, role)

        if rect.width >= 2 and rect.height >= 2:
            self.set_cell(rect.x, rect.y, TOP_LEFT, role)
            self.set_cell(last_x, rect.y, TOP_RIGHT, role)
            self.set_cell(rect.x, last_y, BOTTOM_LEFT, role)
            self.set_cell(last_x, last_y, BOTTOM_RIGHT, role)

        if title:
            title_area = Rect(rect.x + 1, rect.y, max(0, rect.width - 2), 1)
            self.put_text(title_area.x, rect.y, title, role, clip=title_area)

    def rows(self) -> List[str]:
        return ["".join(row) for row in self.chars]

    def runs(self, y: int) -> Iterator[Tuple[int, str, str]]:
        """Yield (x, text, role) for each stretch of same-role cells on row y."""
        chars, roles = self.chars[y], self.roles[y]
        start = 0
        for x in range(1, self.width + 1):
            if x == self.width or roles[x] != roles[start]:
                yield start, "".join(chars[start:x]), roles[start]
                start = x


def split_main(area: Rect) -> Tuple[Rect, Rect, Rect]:
    """Header, clock panel and footer, top to bottom.

    The clock panel keeps at least one row; on short screens the footer
    gives way first, then the header.
    """
    footer_height = min(FOOTER_HEIGHT, max(0, area.height - HEADER_HEIGHT - 1))
    header_height = min(HEADER_HEIGHT, max(0, area.height - footer_height - 1))
    body_height = max(0, area.height - header_height - footer_height)

    header = Rect(area.x, area.y, area.width, header_height)
    body = Rect(area.x, header.bottom, area.width, body_height)
    footer = Rect(area.x, body.bottom, area.width, footer_height)
    return header, body, footer


def _percent_slice(start: int, length: int, percent: int) -> Tuple[int, int]:
    outer = (100 - percent) // 2
    return start + length * outer // 100, length * percent // 100


def centered_rect(percent_x: int, percent_y: int, rect: Rect) -> Rect:
    """A rectangle of the given percentage size centred inside `rect`."""
    y, height = _percent_slice(rect.y, rect.height, percent_y)
    x, width = _percent_slice(rect.x, rect.width, percent_x)
    return Rect(x, y, width, height)


def put_centered(canvas: Canvas, area: Rect, y: int, text: str, role: str):
    """Centre one line horizontally in `area`, trimming both ends if too wide."""
    if area.width <= 0:
        return
    if len(text) > area.width:
        start = (len(text) - area.width) // 2
        text = text[start:start + area.width]
    x = area.x + (area.width - len(text)) // 2
    canvas.put_text(x, y, text, role, clip=area)


def clock_lines(now: datetime) -> List[Tuple[str, str]]:
    """The clock panel contents as (text, role) pairs."""
    lines = [(line, ACCENT) for line in render_time_display(now.strftime(TIME_FORMAT))]
    lines.append(("", TEXT))
    lines.append((now.strftime(DATE_FORMAT), TEXT))
    return lines


def draw_clock_panel(canvas: Canvas, area: Rect, now: datetime):
    canvas.draw_box(area, ACCENT)
    inner = area.inner()
    lines = clock_lines(now)
    top = inner.y + max(0, (inner.height - len(lines)) // 2)
    for offset, (text, role) in enumerate(lines):
        put_centered(canvas, inner, top + offset, text, role)


def draw_alarm_popup(canvas: Canvas, app: AppState):
    popup = centered_rect(POPUP_PERCENT_X, POPUP_PERCENT_Y, canvas.area)
    canvas.fill(popup, " ", POPUP)
    canvas.draw_box(popup, POPUP, POPUP_TITLE)
    inner = popup.inner()
    canvas.put_text(inner.x, inner.y, app.alarm_input, POPUP_TEXT, clip=inner)


def compose_frame(app: AppState, width: int, height: int, now: datetime) -> Canvas:
    """Build the full frame for the current state."""
    canvas = Canvas(width, height)

    for y, line in enumerate(generate_animated_background(app.animation_frame, canvas.width, canvas.height)):
        canvas.put_text(0, y, line, BACKGROUND)

    header, body, footer = split_main(canvas.area)
    put_centered(canvas, header, header.y, HEADER_TEXT, ACCENT)
    draw_clock_panel(canvas, body, now)
    put_centered(canvas, footer, footer.y, app.alarm_status(), TEXT)

    if app.show_alarm_dialog:
        draw_alarm_popup(canvas, app)

    return canvas
