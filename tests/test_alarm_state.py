from __future__ import annotations

import time as time_module
from datetime import datetime, time, timedelta, timezone

import pytest

from alarm_state import (
    AppState,
    Key,
    KeyEvent,
    KeyKind,
    next_alarm_time,
    parse_alarm_input,
)
from rain_backdrop import FRAME_MASK

TZ = timezone(timedelta(hours=2))


def _at(hour: int, minute: int = 0, second: int = 0, day: int = 18) -> datetime:
    return datetime(2026, 10, day, hour, minute, second, tzinfo=TZ)


def _type(app: AppState, text: str, now: datetime | None = None) -> None:
    for char in text:
        app.handle_key_event(char, now=now)


def _open_dialog_with(text: str) -> AppState:
    app = AppState()
    app.handle_key_event("a")
    _type(app, text)
    return app


def test_initial_state() -> None:
    app = AppState()

    assert app.should_quit is False
    assert app.alarm_time is None
    assert app.show_alarm_dialog is False
    assert app.alarm_input == ""
    assert app.animation_frame == 0
    assert app.alarm_status() == "No alarm set"


def test_quit_key_sets_flag() -> None:
    app = AppState()
    app.handle_key_event("q")

    assert app.should_quit is True


def test_quit_key_works_while_dialog_is_open() -> None:
    app = _open_dialog_with("12")
    app.handle_key_event("q")

    assert app.should_quit is True
    assert app.alarm_input == "12"


def test_text_entry_and_backspace() -> None:
    app = _open_dialog_with("14:05")
    assert app.alarm_input == "14:05"

    app.handle_key_event(Key.BACKSPACE)
    assert app.alarm_input == "14:0"


def test_backspace_on_empty_input_is_noop() -> None:
    app = AppState()
    app.handle_key_event("a")
    app.handle_key_event(Key.BACKSPACE)

    assert app.alarm_input == ""
    assert app.show_alarm_dialog is True


def test_text_ignored_while_dialog_closed() -> None:
    app = AppState()
    _type(app, "0930")
    app.handle_key_event(Key.BACKSPACE)
    app.handle_key_event(Key.ENTER, now=_at(8))

    assert app.alarm_input == ""
    assert app.alarm_time is None
    assert app.show_alarm_dialog is False


def test_confirm_later_today() -> None:
    app = _open_dialog_with("09:00")
    app.handle_key_event(Key.ENTER, now=_at(8))

    assert app.alarm_time == _at(9)
    assert app.show_alarm_dialog is False
    assert app.alarm_input == ""
    assert app.alarm_status() == "Alarm: 09:00"


def test_confirm_rolls_to_tomorrow() -> None:
    app = _open_dialog_with("09:00")
    app.handle_key_event(Key.ENTER, now=_at(10))

    assert app.alarm_time == _at(9, day=19)


def test_confirm_equal_time_rolls_to_tomorrow() -> None:
    app = _open_dialog_with("09:00")
    app.handle_key_event(Key.ENTER, now=_at(9, 0, 30))

    assert app.alarm_time == _at(9, day=19)
    assert app.alarm_time > _at(9, 0, 30)


def test_confirm_rolls_over_month_end() -> None:
    now = datetime(2026, 10, 31, 23, 30, tzinfo=TZ)

    assert next_alarm_time(time(6, 15), now) == datetime(2026, 11, 1, 6, 15, tzinfo=TZ)


def test_invalid_input_is_discarded() -> None:
    app = AppState()
    app.alarm_time = _at(7)
    app.handle_key_event("a")
    _type(app, "9:0")
    app.handle_key_event(Key.ENTER, now=_at(8))

    assert app.alarm_time == _at(7)
    assert app.show_alarm_dialog is False
    assert app.alarm_input == ""


def test_cancel_keeps_alarm() -> None:
    app = AppState()
    app.alarm_time = _at(7)
    app.handle_key_event("a")
    _type(app, "11:1")
    app.handle_key_event(Key.ESC)

    assert app.show_alarm_dialog is False
    assert app.alarm_input == ""
    assert app.alarm_time == _at(7)


def test_alarm_key_inside_dialog_is_not_typed() -> None:
    app = _open_dialog_with("1a2")

    assert app.alarm_input == "12"
    assert app.show_alarm_dialog is True


@pytest.mark.parametrize("kind", [KeyKind.RELEASE, KeyKind.REPEAT])
def test_non_press_events_are_ignored(kind: str) -> None:
    app = AppState()
    app.handle_key_event(KeyEvent("q", kind))
    app.handle_key_event(KeyEvent("a", kind))

    assert app.should_quit is False
    assert app.show_alarm_dialog is False


def test_press_events_are_applied() -> None:
    app = AppState()
    app.handle_key_event(KeyEvent("a"))
    app.handle_key_event(KeyEvent("7"))

    assert app.alarm_input == "7"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("00:00", time(0, 0)),
        ("09:05", time(9, 5)),
        ("23:59", time(23, 59)),
    ],
)
def test_parse_alarm_input_valid(text: str, expected: time) -> None:
    assert parse_alarm_input(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "9:0", "9:00", "09:0", "24:00", "12:60", " 09:00", "09:00 ", "0900", "ab:cd", "09:00:00"],
)
def test_parse_alarm_input_invalid(text: str) -> None:
    assert parse_alarm_input(text) is None


def test_check_alarm_clears_when_reached() -> None:
    app = AppState()
    app.alarm_time = _at(9)

    assert app.check_alarm(_at(8, 59, 59)) is False
    assert app.alarm_time == _at(9)

    assert app.check_alarm(_at(9)) is True
    assert app.alarm_time is None
    assert app.alarm_status() == "No alarm set"


def test_check_alarm_without_alarm() -> None:
    app = AppState()

    assert app.check_alarm(_at(9)) is False


def test_advance_frame_wraps() -> None:
    app = AppState()
    app.advance_frame()
    assert app.animation_frame == 1

    app.animation_frame = FRAME_MASK
    app.advance_frame()
    assert app.animation_frame == 0


@pytest.fixture
def berlin_host(monkeypatch):
    """Run the test with the host clock set to Europe/Berlin."""
    if not hasattr(time_module, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time_module.tzset()
    try:
        if datetime(2026, 7, 1, 12).astimezone().utcoffset() != timedelta(hours=2):
            pytest.skip("Europe/Berlin zone data is not installed")
        yield
    finally:
        monkeypatch.undo()
        time_module.tzset()


def test_host_alarm_across_spring_forward_keeps_wall_time(berlin_host) -> None:
    now = datetime(2026, 3, 28, 10, 0).astimezone()
    assert now.utcoffset() == timedelta(hours=1)

    app = _open_dialog_with("09:00")
    app.handle_key_event(Key.ENTER, now=now)

    assert app.alarm_time.utcoffset() == timedelta(hours=2)
    wall = app.alarm_time.astimezone()
    assert (wall.day, wall.hour, wall.minute) == (29, 9, 0)
    assert app.alarm_time == datetime(2026, 3, 29, 7, 0, tzinfo=timezone.utc)
    assert app.alarm_status() == "Alarm: 09:00"


def test_host_alarm_across_fall_back_keeps_wall_time(berlin_host) -> None:
    now = datetime(2026, 10, 24, 10, 0).astimezone()

    alarm = next_alarm_time(time(9, 0), now)

    assert alarm.utcoffset() == timedelta(hours=1)
    assert alarm == datetime(2026, 10, 25, 8, 0, tzinfo=timezone.utc)


def test_host_alarm_fires_at_wall_time_after_dst_change(berlin_host) -> None:
    app = AppState()
    app.alarm_time = next_alarm_time(time(9, 0), datetime(2026, 3, 28, 10, 0).astimezone())

    assert app.check_alarm(datetime(2026, 3, 29, 8, 59).astimezone()) is False
    assert app.check_alarm(datetime(2026, 3, 29, 9, 0).astimezone()) is True


def test_named_zone_alarm_uses_target_date_offset() -> None:
    zoneinfo = pytest.importorskip("zoneinfo")
    try:
        berlin = zoneinfo.ZoneInfo("Europe/Berlin")
    except zoneinfo.ZoneInfoNotFoundError:
        pytest.skip("Europe/Berlin zone data is not installed")

    alarm = next_alarm_time(time(9, 0), datetime(2026, 3, 28, 10, 0, tzinfo=berlin))

    assert alarm.utcoffset() == timedelta(hours=2)
    assert alarm == datetime(2026, 3, 29, 7, 0, tzinfo=timezone.utc)
