# clubcal/columns.py
"""Column layout for timed events that fit inside one day.

Events that share time are split into side-by-side columns. Each overlap
group (connected run of overlapping events) is laid out on its own, so an
event only narrows when something actually overlaps it.
"""
from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List, Optional, Tuple

from .model import CalendarEvent, ColumnAssignment


def sort_for_layout(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    # start asc, longer first on ties (end desc), id last for a stable total order
    out = sorted(events, key=lambda ev: ev.id)
    out.sort(key=lambda ev: ev.end, reverse=True)
    out.sort(key=lambda ev: ev.start)
    return out


def overlap_groups(events: Iterable[CalendarEvent]) -> List[List[CalendarEvent]]:
    """Split events into overlap groups, in layout order.

    A new group starts whenever the next event starts at or after the latest
    end seen in the current group.
    """
    groups: List[List[CalendarEvent]] = []
    cur: List[CalendarEvent] = []
    latest_end: Optional[dt.datetime] = None

    for ev in sort_for_layout(events):
        if latest_end is None or ev.start >= latest_end:
            if cur:
                groups.append(cur)
            cur = [ev]
            latest_end = ev.end
        else:
            cur.append(ev)
            latest_end = max(latest_end, ev.end)

    if cur:
        groups.append(cur)
    return groups


def max_concurrency(events: Iterable[CalendarEvent]) -> int:
    """Peak number of simultaneously running events (sweep line).

    Ends sort before starts at the same instant, so back-to-back events are
    not counted as concurrent.
    """
    pts: List[Tuple[dt.datetime, int]] = []
    for ev in events:
        pts.append((ev.start, +1))
        pts.append((ev.end, -1))
    pts.sort(key=lambda x: (x[0], x[1]))

    count = 0
    peak = 0
    for _t, delta in pts:
        count += delta
        peak = max(peak, count)
    return peak


def _assign_group(group: List[CalendarEvent]) -> Dict[str, ColumnAssignment]:
    column_ends: List[dt.datetime] = []
    cols: List[Tuple[str, int]] = []
    for ev in group:
        col = 0
        while col < len(column_ends) and column_ends[col] > ev.start:
            col += 1
        if col == len(column_ends):
            column_ends.append(ev.end)
        else:
            column_ends[col] = max(column_ends[col], ev.end)
        cols.append((ev.id, col))

    # First-fit in start order never opens more columns than the peak
    # concurrency; the extra term only matters for zero-length events.
    num_columns = max(1, max_concurrency(group), len(column_ends))
    return {uid: ColumnAssignment(column=col, num_columns=num_columns) for uid, col in cols}


def compute_event_layout(events: Iterable[CalendarEvent]) -> Dict[str, ColumnAssignment]:
    """Return {event id: ColumnAssignment} for single-day timed events."""
    result: Dict[str, ColumnAssignment] = {}
    for group in overlap_groups(events):
        result.update(_assign_group(group))
    return result


__all__ = [
    "sort_for_layout",
    "overlap_groups",
    "max_concurrency",
    "compute_event_layout",
]
