# clubcal/normalize.py
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .model import LOCATION_TYPES, CalendarEvent, EventLocation
from .util.console import eprint, obs_enabled
from .util.timeparse import parse_instant
from .util.tz import to_wall_clock


def _pick(raw: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in raw and raw[k] is not None:
            return raw[k]
    return None


def normalize_location(raw: Any) -> Optional[EventLocation]:
    if not isinstance(raw, dict):
        return None
    typ = str(raw.get("type") or "").strip()
    if typ not in LOCATION_TYPES:
        return None
    if typ == "sheet":
        sheet_id = _pick(raw, "sheetId", "sheet_id")
        if not isinstance(sheet_id, int):
            return None
        name = _pick(raw, "sheetName", "sheet_name")
        return EventLocation(type="sheet", sheet_id=sheet_id, sheet_name=str(name) if name is not None else None)
    return EventLocation(type=typ)


def _locations(raw: Any) -> Tuple[EventLocation, ...]:
    if not isinstance(raw, list):
        return ()
    out: List[EventLocation] = []
    for x in raw:
        loc = normalize_location(x)
        if loc is not None:
            out.append(loc)
    return tuple(out)


def normalize_event(raw: Dict[str, Any], *, tz: Optional[dt.tzinfo] = None) -> Optional[CalendarEvent]:
    """Build a CalendarEvent from an API-shaped dict (camelCase or snake_case keys).

    Returns None when the row has no id or no parsable start. Aware instants
    are converted to wall clock in `tz` (or kept as their own wall clock when
    tz is None).
    """
    if not isinstance(raw, dict):
        return None
    uid = str(_pick(raw, "id", "uuid") or "").strip()
    if not uid:
        return None

    start_raw = _pick(raw, "start", "start_dt")
    end_raw = _pick(raw, "end", "end_dt")
    start = parse_instant(start_raw)
    end = parse_instant(end_raw)

    if start is None:
        if obs_enabled():
            eprint(f"[clubcal.normalize] WARN: invalid start id={uid!r} value={start_raw!r}")
        return None
    if end is None:
        if obs_enabled() and end_raw is not None:
            eprint(f"[clubcal.normalize] WARN: invalid end id={uid!r} value={end_raw!r}; using start")
        end = start

    if tz is not None:
        start = to_wall_clock(start, tz)
        end = to_wall_clock(end, tz)
    else:
        # Without a target zone, read both ends on the start's offset.
        if start.tzinfo is not None and end.tzinfo is not None and start.utcoffset() != end.utcoffset():
            end = end.astimezone(start.tzinfo)
        start = start.replace(tzinfo=None)
        end = end.replace(tzinfo=None)

    if end < start:
        if obs_enabled():
            eprint(f"[clubcal.normalize] WARN: end before start id={uid!r}; swapping")
        start, end = end, start

    all_day = _pick(raw, "allDay", "all_day")
    rrule = _pick(raw, "recurrenceRrule", "recurrence_rrule")
    created_by = _pick(raw, "createdBy", "created_by")

    return CalendarEvent(
        id=uid,
        start=start,
        end=end,
        all_day=bool(all_day) if isinstance(all_day, (bool, int)) else False,
        type_id=str(_pick(raw, "typeId", "type_id") or "other"),
        title=str(raw.get("title") or ""),
        locations=_locations(raw.get("locations")),
        recurrence_rrule=str(rrule) if rrule else None,
        created_by=str(created_by) if created_by else None,
    )


def normalize_events(rows: Iterable[Any], *, tz: Optional[dt.tzinfo] = None) -> List[CalendarEvent]:
    out: List[CalendarEvent] = []
    seen: set[str] = set()
    for raw in rows:
        ev = normalize_event(raw, tz=tz)
        if ev is None:
            continue
        if ev.id in seen:
            if obs_enabled():
                eprint(f"[clubcal.normalize] WARN: duplicate event id={ev.id!r}; keeping first")
            continue
        seen.add(ev.id)
        out.append(ev)
    return out


__all__ = [
    "normalize_location",
    "normalize_event",
    "normalize_events",
]
