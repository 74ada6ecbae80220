#!/usr/bin/env python3
"""
Application state and key handling for the terminal clock radio.

Keys:
- a: Open the alarm dialog
- q: Quit
- Enter: Confirm the alarm time (HH:MM)
- Esc: Cancel the dialog
- Backspace: Delete the last typed character
"""

import logging
import re
from datetime import datetime, time, timedelta, timezone
from typing import NamedTuple, Optional, Union

from rain_backdrop import FRAME_MASK

logger = logging.getLogger(__name__)

QUIT_KEY = 'q'
ALARM_KEY = 'a'
ALARM_FORMAT = "%H:%M"
ALARM_PATTERN = re.compile(r"([01][0-9]|2[0-3]):[0-5][0-9]")


class Key:
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"


class KeyKind:
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


class KeyEvent(NamedTuple):
    code: str
    kind: str = KeyKind.PRESS


def local_now() -> datetime:
    """Current wall-clock time in the host's local timezone."""
    return datetime.now().astimezone()


def parse_alarm_input(text: str) -> Optional[time]:
    """Parse a zero-padded 24-hour HH:MM string, or return None."""
    if not ALARM_PATTERN.fullmatch(text):
        return None
    return datetime.strptime(text, ALARM_FORMAT).time()


def next_alarm_time(alarm: time, now: datetime) -> datetime:
    """Next local timestamp at `alarm`, strictly after `now`."""
    alarm_date = now.date()
    if alarm <= now.time():
        alarm_date += timedelta(days=1)
    target = datetime.combine(alarm_date, alarm)
    if now.tzinfo is None:
        return target
    if _is_host_local(now):
        # Naive datetimes are read as host local time with that date's offset
        return target.astimezone()
    return target.replace(tzinfo=now.tzinfo)


def _is_host_local(now: datetime) -> bool:
    """True when `now` carries the fixed host offset that astimezone() attaches."""
    if not isinstance(now.tzinfo, timezone):
        return False
    return now.utcoffset() == now.replace(tzinfo=None).astimezone().utcoffset()


class AppState:
    """The single mutable record driven by the main loop."""

    def __init__(self):
        self.should_quit = False
        self.alarm_time: Optional[datetime] = None
        self.show_alarm_dialog = False
        self.alarm_input = ""
        self.animation_frame = 0

    def handle_key_event(self, key: Union[KeyEvent, str], now: Optional[datetime] = None):
        """Apply one key press to the state."""
        if isinstance(key, KeyEvent):
            if key.kind != KeyKind.PRESS:
                return
            key = key.code

        if key == QUIT_KEY:
            self.should_quit = True
        elif key == ALARM_KEY:
            self.show_alarm_dialog = True
        elif key == Key.ESC:
            self.close_dialog()
        elif key == Key.ENTER:
            if self.show_alarm_dialog:
                self.confirm_alarm(now or local_now())
        elif key == Key.BACKSPACE:
            if self.show_alarm_dialog:
                self.alarm_input = self.alarm_input[:-1]
        elif len(key) == 1:
            if self.show_alarm_dialog:
                self.alarm_input += key

    def confirm_alarm(self, now: datetime):
        """Arm the alarm from the dialog buffer and close the dialog."""
        alarm = parse_alarm_input(self.alarm_input)
        if alarm is None:
            logger.debug("Discarding alarm input %r", self.alarm_input)
        else:
            self.alarm_time = next_alarm_time(alarm, now)
            logger.info("Alarm set for %s", self.alarm_time.isoformat())
        self.close_dialog()

    def close_dialog(self):
        self.show_alarm_dialog = False
        self.alarm_input = ""

    def check_alarm(self, now: datetime) -> bool:
        """Clear the alarm once `now` reaches it. Returns True if it fired."""
        if self.alarm_time is not None and now >= self.alarm_time:
            logger.info("Alarm reached at %s", now.strftime(ALARM_FORMAT))
            self.alarm_time = None
            return True
        return False

    def advance_frame(self):
        self.animation_frame = (self.animation_frame + 1) & FRAME_MASK

    def alarm_status(self) -> str:
        if self.alarm_time is not None:
            return f"Alarm: {self.alarm_time.strftime(ALARM_FORMAT)}"
        return "No alarm set"
