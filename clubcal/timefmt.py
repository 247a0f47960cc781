# clubcal/timefmt.py
"""Terse time strings for event cards and calendar headers.

All functions read local wall-clock fields only; no timezone conversion.
"""
from __future__ import annotations

import datetime as dt

EN_DASH = "–"

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _meridiem(t: dt.datetime) -> str:
    return "a" if t.hour < 12 else "p"


def _clock(t: dt.datetime) -> str:
    hour12 = t.hour % 12 or 12
    if t.minute == 0:
        return str(hour12)
    return f"{hour12}:{t.minute:02d}"


def format_compact_time(t: dt.datetime) -> str:
    """'3a' or '3:30a'. Minutes only when not on the hour."""
    return _clock(t) + _meridiem(t)


def format_compact_time_range(start: dt.datetime, end: dt.datetime) -> str:
    """'3–5p' when both ends share a meridiem, else '11:30a–12p'."""
    if _meridiem(start) == _meridiem(end):
        return f"{_clock(start)}{EN_DASH}{_clock(end)}{_meridiem(end)}"
    return f"{format_compact_time(start)}{EN_DASH}{format_compact_time(end)}"


def format_hour_label(hour: int) -> str:
    # hour gutter: "12 am", "6 am", "12 pm", "3 pm"
    if hour == 0:
        return "12 am"
    if hour < 12:
        return f"{hour} am"
    if hour == 12:
        return "12 pm"
    return f"{hour - 12} pm"


def format_month_day(d: dt.date) -> str:
    return f"{_MONTHS[d.month - 1][:3]} {d.day}"


def format_date_span(start: dt.date, end: dt.date) -> str:
    return f"{format_month_day(start)} {EN_DASH} {format_month_day(end)}"


def format_day_header(d: dt.date) -> str:
    return f"{_WEEKDAYS[d.weekday()]}, {_MONTHS[d.month - 1]} {d.day}, {d.year}"


def format_week_header(start: dt.date, end: dt.date) -> str:
    return f"{format_month_day(start)} {EN_DASH} {format_month_day(end)}, {end.year}"


def format_month_header(d: dt.date) -> str:
    return f"{_MONTHS[d.month - 1]} {d.year}"


__all__ = [
    "EN_DASH",
    "format_compact_time",
    "format_compact_time_range",
    "format_hour_label",
    "format_month_day",
    "format_date_span",
    "format_day_header",
    "format_week_header",
    "format_month_header",
]
