#!/usr/bin/env python3
"""
Terminal Clock Radio
A real-time ASCII-art clock for the terminal with a rainy street-lamp
backdrop and a one-shot alarm.

Usage: clockradio

Controls:
- a: Set alarm (type HH:MM, Enter to confirm, Esc to cancel)
- q: Quit
"""

import argparse
import curses
import locale
import logging
import sys
import time
from typing import Callable, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from alarm_state import AppState, Key, KeyEvent, local_now
from clock_frame import ACCENT, BACKGROUND, POPUP, POPUP_TEXT, TEXT, Canvas, compose_frame

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1  # seconds to wait for a key each tick
FRAME_DELAY = 0.05   # pause after each tick
ESC_DELAY_MS = 25

# Curses colour components are on a 0-1000 scale
PINK_RGB = (1000, 420, 541)  # #FF6B8A
GREY_RGB = (392, 392, 392)   # #646464
PINK_SLOT = 13
GREY_SLOT = 8


class Theme:
    """Curses colour pairs for each frame style role."""

    def __init__(self):
        self.attrs = {}

    def init_colors(self):
        """Initialize color pairs."""
        if not curses.has_colors():
            return
        curses.start_color()

        pink, grey, grey_attr = curses.COLOR_MAGENTA, curses.COLOR_WHITE, curses.A_DIM
        if curses.COLORS >= 16:
            grey, grey_attr = GREY_SLOT, curses.A_NORMAL
            if curses.can_change_color():
                curses.init_color(PINK_SLOT, *PINK_RGB)
                curses.init_color(GREY_SLOT, *GREY_RGB)
                pink = PINK_SLOT

        roles = {
            BACKGROUND: (grey, curses.COLOR_BLACK, grey_attr),
            ACCENT: (pink, curses.COLOR_BLACK, curses.A_BOLD),
            TEXT: (curses.COLOR_WHITE, curses.COLOR_BLACK, curses.A_NORMAL),
            POPUP: (pink, curses.COLOR_BLACK, curses.A_NORMAL),
            POPUP_TEXT: (curses.COLOR_WHITE, curses.COLOR_BLACK, curses.A_NORMAL),
        }
        for pair_num, (role, (fg, bg, attr)) in enumerate(roles.items(), start=1):
            curses.init_pair(pair_num, fg, bg)
            self.attrs[role] = curses.color_pair(pair_num) | attr

    def get_attr(self, role: str) -> int:
        return self.attrs.get(role, curses.A_NORMAL)


class CursesSurface:
    """Paints composed frames onto a curses window."""

    def __init__(self, stdscr, theme: Theme):
        self.stdscr = stdscr
        self.theme = theme

    def size(self) -> Tuple[int, int]:
        height, width = self.stdscr.getmaxyx()
        return width, height

    def draw(self, canvas: Canvas):
        self.stdscr.erase()
        last_row = canvas.height - 1
        for y in range(canvas.height):
            for x, text, role in canvas.runs(y):
                attr = self.theme.get_attr(role)
                if y == last_row and x + len(text) >= canvas.width:
                    # addstr faults when the cursor steps past the bottom-right cell
                    self.stdscr.insstr(y, x, text, attr)
                else:
                    self.stdscr.addstr(y, x, text, attr)
        self.stdscr.refresh()


def translate_key(code: int) -> Optional[KeyEvent]:
    """Map a curses getch() code to a key press, or None to ignore it."""
    if code in (10, 13, curses.KEY_ENTER):
        return KeyEvent(Key.ENTER)
    if code == 27:
        return KeyEvent(Key.ESC)
    if code in (curses.KEY_BACKSPACE, 127, 8):
        return KeyEvent(Key.BACKSPACE)
    if 32 <= code <= 126:  # Printable characters
        return KeyEvent(chr(code))
    return None


class CursesInput:
    """Bounded-wait key source; curses only reports key presses."""

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.stdscr.keypad(True)

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        self.stdscr.timeout(int(timeout * 1000))
        return translate_key(self.stdscr.getch())


def run_app(surface, input_source, app: AppState,
            clock: Callable = local_now, sleep: Callable = time.sleep):
    """Main clock loop: draw, read a key, update, animate, pause.

    Returns once the quit key has been handled. Display and input errors
    propagate to the caller.
    """
    logger.debug("Clock loop started")
    while True:
        width, height = surface.size()
        surface.draw(compose_frame(app, width, height, clock()))

        event = input_source.poll(POLL_INTERVAL)
        if event is not None:
            app.handle_key_event(event, now=clock())

        if app.should_quit:
            logger.debug("Quit requested at frame %d", app.animation_frame)
            return

        app.check_alarm(clock())
        app.advance_frame()
        sleep(FRAME_DELAY)


def display_clock(stdscr):
    """Curses entry point: set up the screen and run the loop."""
    theme = Theme()
    theme.init_colors()

    try:
        curses.curs_set(0)
    except curses.error:
        logger.debug("Terminal cannot hide the cursor")
    curses.set_escdelay(ESC_DELAY_MS)

    run_app(CursesSurface(stdscr, theme), CursesInput(stdscr), AppState())


def main(argv=None):
    """Entry point for the clock application"""
    parser = argparse.ArgumentParser(
        prog="clockradio",
        description="Terminal clock radio with an animated backdrop and a one-shot alarm",
    )
    parser.parse_args(argv)

    console = Console(stderr=True)
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    try:
        locale.setlocale(locale.LC_ALL, "")
        curses.wrapper(display_clock)
    except KeyboardInterrupt:
        console.print("\nClock terminated. Goodbye!")
        sys.exit(0)
    except (curses.error, locale.Error, UnicodeError, OSError) as e:
        logger.debug("Clock terminated abnormally", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
