# clubcal/hours.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Sequence, Tuple

from .model import CalendarEvent

HOURS: Tuple[int, ...] = tuple(range(24))
EARLY_HOURS_END = 6  # 12am-6am is hidden unless something happens there


def fractional_hour(t: dt.datetime) -> float:
    return t.hour + t.minute / 60.0


def get_visible_hours(timed_events: Iterable[CalendarEvent], *, early_hours_end: int = EARLY_HOURS_END) -> List[int]:
    """Hours to display: all 24 if any event touches the early band, else early_hours_end..23."""
    for ev in timed_events:
        if fractional_hour(ev.start) < early_hours_end or fractional_hour(ev.end) < early_hours_end:
            return list(HOURS)
    return list(HOURS[early_hours_end:])


def event_display_hours(
    ev: CalendarEvent,
    day: dt.date,
    visible_hours: Sequence[int],
) -> Optional[Tuple[float, float]]:
    """Clip an event to the visible hour window of `day`.

    Returns (start_hour, end_hour) as fractional hours on the 0-24 scale, or
    None when the event falls outside the window. Edges that belong to other
    days snap to the window bounds.
    """
    if not visible_hours:
        return None
    window_start = float(visible_hours[0])
    window_end = window_start + len(visible_hours)

    start_h = fractional_hour(ev.start) if ev.start.date() == day else window_start
    end_h = fractional_hour(ev.end) if ev.end.date() == day else window_end

    display_start = max(start_h, window_start)
    display_end = min(end_h, window_end)
    if display_start > display_end:
        return None
    return display_start, display_end


__all__ = [
    "HOURS",
    "EARLY_HOURS_END",
    "fractional_hour",
    "get_visible_hours",
    "event_display_hours",
]
