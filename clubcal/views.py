# clubcal/views.py
"""Day, week and month view assembly.

Each view derives its display range from an anchor date, then routes every
event to exactly one layout: timed single-day events go to the hour grid's
column layout, multi-day events go to banding (week/month) or the all-day
list (day), single-day all-day events are listed per day.
"""
from __future__ import annotations

import calendar
import datetime as dt
from typing import Iterable, List, Optional, Sequence, Tuple

from .bands import get_multi_day_segments, max_band_count, reserved_slot_count, sort_all_day_events, week_band_counts
from .classify import event_overlaps_dates, events_for_day, is_multi_day, is_on_ice, is_timed_single_day
from .columns import compute_event_layout, sort_for_layout
from .hours import event_display_hours, get_visible_hours
from .model import (
    VIEWS,
    CalendarEvent,
    CalendarView,
    DayLayout,
    DisplayRange,
    MonthLayout,
    TimedPlacement,
    WeekLayout,
)
from .timefmt import format_day_header, format_month_header, format_week_header
from .util.timeparse import parse_instant

DEFAULT_VIEW = "month"


def parse_view_param(value: Optional[str]) -> CalendarView:
    v = (value or "").strip().lower()
    return v if v in VIEWS else DEFAULT_VIEW


def parse_date_param(value: Optional[str], today: Optional[dt.date] = None) -> dt.date:
    fallback = today or dt.date.today()
    if not value:
        return fallback
    t = parse_instant(value)
    if t is None:
        return fallback
    return t.date()


def start_of_week(d: dt.date) -> dt.date:
    # Sunday-first weeks; date.weekday() is Monday=0
    return d - dt.timedelta(days=(d.weekday() + 1) % 7)


def week_days(first: dt.date) -> Tuple[dt.date, ...]:
    return tuple(first + dt.timedelta(days=i) for i in range(7))


def month_weeks(anchor: dt.date) -> Tuple[Tuple[dt.date, ...], ...]:
    """Sunday-first week rows covering anchor's month, padded with adjacent days."""
    first = anchor.replace(day=1)
    last = anchor.replace(day=calendar.monthrange(anchor.year, anchor.month)[1])
    cur = start_of_week(first)
    end = start_of_week(last) + dt.timedelta(days=6)
    weeks: List[Tuple[dt.date, ...]] = []
    while cur <= end:
        weeks.append(week_days(cur))
        cur += dt.timedelta(days=7)
    return tuple(weeks)


def display_range(view: CalendarView, anchor: dt.date) -> DisplayRange:
    if view == "day":
        return DisplayRange(
            view="day",
            anchor=anchor,
            start=anchor,
            end=anchor,
            weeks=(),
            header_label=format_day_header(anchor),
        )
    if view == "week":
        days = week_days(start_of_week(anchor))
        return DisplayRange(
            view="week",
            anchor=anchor,
            start=days[0],
            end=days[-1],
            weeks=(days,),
            header_label=format_week_header(days[0], days[-1]),
        )
    if view == "month":
        weeks = month_weeks(anchor)
        return DisplayRange(
            view="month",
            anchor=anchor,
            start=weeks[0][0],
            end=weeks[-1][-1],
            weeks=weeks,
            header_label=format_month_header(anchor),
        )
    raise ValueError(f"Unknown view: {view!r} (expected one of {', '.join(VIEWS)})")


def _add_months(d: dt.date, months: int) -> dt.date:
    idx = d.year * 12 + (d.month - 1) + months
    year, month = divmod(idx, 12)
    month += 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return dt.date(year, month, day)


def shift_anchor(view: CalendarView, anchor: dt.date, step: int) -> dt.date:
    """Move the anchor by `step` days, weeks or months (prev/next navigation)."""
    if view == "day":
        return anchor + dt.timedelta(days=step)
    if view == "week":
        return anchor + dt.timedelta(weeks=step)
    return _add_months(anchor, step)


def _place_timed(timed: Sequence[CalendarEvent], day: dt.date, visible_hours: Sequence[int]) -> List[TimedPlacement]:
    layout = compute_event_layout(timed)
    out: List[TimedPlacement] = []
    for ev in sort_for_layout(timed):
        hours = event_display_hours(ev, day, visible_hours)
        if hours is None:
            continue
        col = layout[ev.id]
        out.append(
            TimedPlacement(
                event=ev,
                column=col.column,
                num_columns=col.num_columns,
                start_hour=hours[0],
                end_hour=hours[1],
            )
        )
    return out


def layout_day(events: Iterable[CalendarEvent], day: dt.date) -> DayLayout:
    day_events = events_for_day(events, day)
    timed = [ev for ev in day_events if is_timed_single_day(ev)]
    all_day = sort_all_day_events(ev for ev in day_events if not is_timed_single_day(ev))
    # Multi-day timed events still count toward the early band.
    visible = get_visible_hours(ev for ev in day_events if not ev.all_day)
    return DayLayout(
        day=day,
        visible_hours=visible,
        timed=_place_timed(timed, day, visible),
        all_day=all_day,
        range=display_range("day", day),
    )


def layout_week(events: Iterable[CalendarEvent], anchor: dt.date) -> WeekLayout:
    rng = display_range("week", anchor)
    week_events = [ev for ev in events if event_overlaps_dates(ev, rng.start, rng.end)]

    timed_by_day = [(d, [ev for ev in events_for_day(week_events, d) if is_timed_single_day(ev)]) for d in rng.days]
    visible = get_visible_hours(ev for ev in week_events if not ev.all_day)

    days: List[DayLayout] = []
    for d, timed in timed_by_day:
        singles = [ev for ev in events_for_day(week_events, d) if ev.all_day and not is_multi_day(ev)]
        days.append(DayLayout(day=d, visible_hours=visible, timed=_place_timed(timed, d, visible), all_day=singles))

    segments = get_multi_day_segments(week_events, rng.weeks)
    return WeekLayout(
        range=rng,
        visible_hours=visible,
        days=days,
        segments=segments,
        band_count=max_band_count(segments),
    )


def layout_month(events: Iterable[CalendarEvent], anchor: dt.date) -> MonthLayout:
    rng = display_range("month", anchor)
    month_events = [ev for ev in events if event_overlaps_dates(ev, rng.start, rng.end)]
    segments = get_multi_day_segments(month_events, rng.weeks)

    out = MonthLayout(
        range=rng,
        segments=segments,
        band_counts=week_band_counts(segments, len(rng.weeks)),
        max_bands=max_band_count(segments),
    )
    singles = [ev for ev in month_events if not is_multi_day(ev)]
    for d in rng.days:
        day_events = events_for_day(singles, d)
        day_events.sort(key=lambda ev: (not ev.all_day, ev.start, ev.id))
        out.day_events[d] = day_events
        out.reserved_slots[d] = reserved_slot_count(month_events, d)
    return out


def layout_view(
    events: Iterable[CalendarEvent],
    view: CalendarView,
    anchor: dt.date,
    *,
    on_ice_only: bool = False,
):
    """Dispatch to the layout for `view`. Returns DayLayout, WeekLayout or MonthLayout."""
    evs = [ev for ev in events if is_on_ice(ev)] if on_ice_only else list(events)
    if view == "day":
        return layout_day(evs, anchor)
    if view == "week":
        return layout_week(evs, anchor)
    if view == "month":
        return layout_month(evs, anchor)
    raise ValueError(f"Unknown view: {view!r} (expected one of {', '.join(VIEWS)})")


__all__ = [
    "DEFAULT_VIEW",
    "parse_view_param",
    "parse_date_param",
    "start_of_week",
    "week_days",
    "month_weeks",
    "display_range",
    "shift_anchor",
    "layout_day",
    "layout_week",
    "layout_month",
    "layout_view",
]
