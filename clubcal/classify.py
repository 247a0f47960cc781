# clubcal/classify.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List

from .model import MULTI_DAY, SINGLE_DAY, CalendarEvent


def is_multi_day(ev: CalendarEvent) -> bool:
    """True when the event's end falls on a later calendar date than its start."""
    return ev.start.date() != ev.end.date()


def is_all_day(ev: CalendarEvent) -> bool:
    return bool(ev.all_day)


def classify_event(ev: CalendarEvent) -> str:
    return MULTI_DAY if is_multi_day(ev) else SINGLE_DAY


def is_on_ice(ev: CalendarEvent) -> bool:
    return any(loc.type == "sheet" for loc in ev.locations)


def event_overlaps_day(ev: CalendarEvent, day: dt.date) -> bool:
    # Whole-day comparison: the event's start date through its end date, inclusive.
    return ev.start.date() <= day <= ev.end.date()


def event_overlaps_dates(ev: CalendarEvent, first: dt.date, last: dt.date) -> bool:
    return ev.start.date() <= last and ev.end.date() >= first


def events_for_day(events: Iterable[CalendarEvent], day: dt.date) -> List[CalendarEvent]:
    return [ev for ev in events if event_overlaps_day(ev, day)]


def is_timed_single_day(ev: CalendarEvent) -> bool:
    """Events routed to the hour grid's column layout."""
    return not ev.all_day and not is_multi_day(ev)


__all__ = [
    "is_multi_day",
    "is_all_day",
    "classify_event",
    "is_on_ice",
    "event_overlaps_day",
    "event_overlaps_dates",
    "events_for_day",
    "is_timed_single_day",
]
