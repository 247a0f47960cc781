# clubcal/bands.py
"""Multi-day event banding across week rows.

Every multi-day event is clipped to each week row it touches, giving one
segment per row. Segments of a row are then stacked into bands (horizontal
lanes) first-fit, so segments whose columns intersect never share a band.
A band keeps one occupied range that widens to cover everything placed in
it. Segments arrive in start-column order, so testing against the widened
range gives the same answer as testing each placed segment.
"""
from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List, Sequence, Tuple

from .classify import event_overlaps_day, is_multi_day
from .model import CalendarEvent, MultiDaySegment

WEEK_LEN = 7

_RawSegment = Tuple[CalendarEvent, int, int, bool, bool]  # ev, start_col, end_col, round_left, round_right


def ranges_intersect(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # Column c spans [c, c + 1); inclusive end columns become exclusive here.
    return a_start < b_end + 1 and b_start < a_end + 1


def _check_week(week: Sequence[dt.date], wi: int) -> None:
    if len(week) != WEEK_LEN:
        raise ValueError(f"week row {wi} must have {WEEK_LEN} days, got {len(week)}")


def _col(week: Sequence[dt.date], d: dt.date) -> int:
    for i, day in enumerate(week):
        if day == d:
            return i
    return -1


def clip_to_week(ev: CalendarEvent, week: Sequence[dt.date]) -> _RawSegment | None:
    """Clip one event to one week row; None when the row does not show it."""
    first = week[0]
    last = week[-1]
    ev_start = ev.start.date()
    ev_end = ev.end.date()
    if ev_end < ev_start or ev_end < first or ev_start > last:
        return None

    start_col = 0 if ev_start <= first else _col(week, ev_start)
    end_col = WEEK_LEN - 1 if ev_end >= last else _col(week, ev_end)
    if start_col < 0 or end_col < 0:
        return None

    round_left = week[start_col] == ev_start
    round_right = week[end_col] == ev_end
    return ev, start_col, end_col, round_left, round_right


def _band_order(raw: List[_RawSegment], first: dt.date) -> List[_RawSegment]:
    continuing = [s for s in raw if s[0].start.date() < first]
    fresh = [s for s in raw if s[0].start.date() >= first]
    # Continuing segments: most remaining days first. Fresh: earliest start first,
    # longer first on equal starts.
    continuing.sort(key=lambda s: s[0].id)
    continuing.sort(key=lambda s: s[0].end.date(), reverse=True)
    fresh.sort(key=lambda s: s[0].id)
    fresh.sort(key=lambda s: s[0].end.date(), reverse=True)
    fresh.sort(key=lambda s: s[0].start.date())
    return continuing + fresh


def _assign_bands(ordered: List[_RawSegment], wi: int) -> List[MultiDaySegment]:
    bands: List[List[int]] = []  # [start_col, end_col] occupied per band
    out: List[MultiDaySegment] = []
    for ev, start_col, end_col, round_left, round_right in ordered:
        band = 0
        while band < len(bands) and ranges_intersect(bands[band][0], bands[band][1], start_col, end_col):
            band += 1
        if band == len(bands):
            bands.append([start_col, end_col])
        else:
            bands[band][0] = min(bands[band][0], start_col)
            bands[band][1] = max(bands[band][1], end_col)
        out.append(
            MultiDaySegment(
                event=ev,
                week_index=wi,
                band_index=band,
                start_col=start_col,
                end_col=end_col,
                round_left=round_left,
                round_right=round_right,
            )
        )
    return out


def get_multi_day_segments(
    events: Iterable[CalendarEvent],
    weeks: Sequence[Sequence[dt.date]],
) -> List[MultiDaySegment]:
    """Clip multi-day events to week rows and assign bands.

    Single-day events are ignored. Output is ordered by week row, then by
    band placement order within the row.
    """
    multi = [ev for ev in events if is_multi_day(ev)]
    segments: List[MultiDaySegment] = []
    for wi, week in enumerate(weeks):
        _check_week(week, wi)
        week = list(week)
        raw: List[_RawSegment] = []
        for ev in multi:
            seg = clip_to_week(ev, week)
            if seg is not None:
                raw.append(seg)
        segments.extend(_assign_bands(_band_order(raw, week[0]), wi))
    return segments


def week_band_counts(segments: Iterable[MultiDaySegment], n_weeks: int) -> List[int]:
    counts = [0] * max(0, n_weeks)
    for seg in segments:
        if 0 <= seg.week_index < len(counts):
            counts[seg.week_index] = max(counts[seg.week_index], seg.band_index + 1)
    return counts


def max_band_count(segments: Iterable[MultiDaySegment]) -> int:
    return max((seg.band_index + 1 for seg in segments), default=0)


def reserved_slot_count(events: Iterable[CalendarEvent], day: dt.date) -> int:
    """Number of multi-day events covering `day` (slots a month cell gives up)."""
    return sum(1 for ev in events if is_multi_day(ev) and event_overlaps_day(ev, day))


def sort_all_day_events(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    """Order a day's all-day list: multi-day events first, longest first."""

    def key(ev: CalendarEvent) -> Tuple[int, int]:
        if is_multi_day(ev):
            return (0, -(ev.end.date() - ev.start.date()).days)
        return (1, 0)

    return sorted(events, key=key)


def segments_by_week(segments: Iterable[MultiDaySegment]) -> Dict[int, List[MultiDaySegment]]:
    out: Dict[int, List[MultiDaySegment]] = {}
    for seg in segments:
        out.setdefault(seg.week_index, []).append(seg)
    return out


__all__ = [
    "WEEK_LEN",
    "ranges_intersect",
    "clip_to_week",
    "get_multi_day_segments",
    "week_band_counts",
    "max_band_count",
    "reserved_slot_count",
    "sort_all_day_events",
    "segments_by_week",
]
