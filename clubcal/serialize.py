# clubcal/serialize.py
"""JSON shapes handed to the rendering layer.

Keys are camelCase to match the club REST API the renderer already speaks.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Union

from .hours import HOURS
from .model import CalendarEvent, DayLayout, DisplayRange, MonthLayout, MultiDaySegment, TimedPlacement, WeekLayout
from .timefmt import format_compact_time_range, format_hour_label

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

AnyLayout = Union[DayLayout, WeekLayout, MonthLayout]


def event_to_dict(ev: CalendarEvent) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": ev.id,
        "typeId": ev.type_id,
        "title": ev.title,
        "start": ev.start.isoformat(),
        "end": ev.end.isoformat(),
        "allDay": ev.all_day,
        "label": "All day" if ev.all_day else format_compact_time_range(ev.start, ev.end),
    }
    if ev.locations:
        locs: List[Dict[str, Any]] = []
        for loc in ev.locations:
            d: Dict[str, Any] = {"type": loc.type}
            if loc.type == "sheet":
                d["sheetId"] = loc.sheet_id
                if loc.sheet_name is not None:
                    d["sheetName"] = loc.sheet_name
            locs.append(d)
        out["locations"] = locs
    return out


def placement_to_dict(p: TimedPlacement) -> Dict[str, Any]:
    return {
        "id": p.event.id,
        "column": p.column,
        "numColumns": p.num_columns,
        "startHour": p.start_hour,
        "endHour": p.end_hour,
    }


def segment_to_dict(s: MultiDaySegment) -> Dict[str, Any]:
    return {
        "id": s.event.id,
        "weekIndex": s.week_index,
        "bandIndex": s.band_index,
        "startCol": s.start_col,
        "endCol": s.end_col,
        "roundLeft": s.round_left,
        "roundRight": s.round_right,
    }


def range_to_dict(rng: DisplayRange) -> Dict[str, Any]:
    return {
        "view": rng.view,
        "anchor": rng.anchor.isoformat(),
        "start": rng.start.isoformat(),
        "end": rng.end.isoformat(),
        "weeks": [[d.isoformat() for d in week] for week in rng.weeks],
        "headerLabel": rng.header_label,
    }


def _hours_to_dict(hours: List[int]) -> Dict[str, Any]:
    return {"hours": list(hours), "labels": [format_hour_label(h) for h in hours], "collapsed": len(hours) < len(HOURS)}


def _day_to_dict(day: DayLayout) -> Dict[str, Any]:
    return {
        "date": day.day.isoformat(),
        "timed": [placement_to_dict(p) for p in day.timed],
        "allDay": [ev.id for ev in day.all_day],
    }


def _collect_events(layout: AnyLayout) -> List[CalendarEvent]:
    seen: Dict[str, CalendarEvent] = {}

    def add(ev: CalendarEvent) -> None:
        seen.setdefault(ev.id, ev)

    if isinstance(layout, DayLayout):
        days = [layout]
    elif isinstance(layout, WeekLayout):
        days = list(layout.days)
    else:
        days = []
    for day in days:
        for p in day.timed:
            add(p.event)
        for ev in day.all_day:
            add(ev)
    if isinstance(layout, (WeekLayout, MonthLayout)):
        for s in layout.segments:
            add(s.event)
    if isinstance(layout, MonthLayout):
        for evs in layout.day_events.values():
            for ev in evs:
                add(ev)
    return sorted(seen.values(), key=lambda ev: (ev.start, ev.id))


def layout_to_dict(layout: AnyLayout) -> Dict[str, Any]:
    out: Dict[str, Any] = {"events": [event_to_dict(ev) for ev in _collect_events(layout)]}

    if isinstance(layout, DayLayout):
        if layout.range is not None:
            out["range"] = range_to_dict(layout.range)
        out["visibleHours"] = _hours_to_dict(layout.visible_hours)
        out["days"] = [_day_to_dict(layout)]
        return out

    out["range"] = range_to_dict(layout.range)
    if isinstance(layout, WeekLayout):
        out["visibleHours"] = _hours_to_dict(layout.visible_hours)
        out["days"] = [_day_to_dict(d) for d in layout.days]
        out["segments"] = [segment_to_dict(s) for s in layout.segments]
        out["bandCount"] = layout.band_count
        return out

    out["segments"] = [segment_to_dict(s) for s in layout.segments]
    out["bandCounts"] = list(layout.band_counts)
    out["maxBands"] = layout.max_bands
    out["cells"] = [
        {
            "date": d.isoformat(),
            "events": [ev.id for ev in layout.day_events.get(d, [])],
            "reservedSlots": layout.reserved_slots.get(d, 0),
        }
        for d in layout.range.days
    ]
    return out


def dumps_layout(layout: AnyLayout, *, pretty: bool = False) -> str:
    data = layout_to_dict(layout)
    if orjson is not None:
        opt = orjson.OPT_INDENT_2 if pretty else 0
        return orjson.dumps(data, option=opt).decode("utf-8")
    if pretty:
        return json.dumps(data, ensure_ascii=False, indent=2)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


__all__ = [
    "event_to_dict",
    "placement_to_dict",
    "segment_to_dict",
    "range_to_dict",
    "layout_to_dict",
    "dumps_layout",
]
