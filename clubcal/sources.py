# clubcal/sources.py
"""Event sources: API-shaped JSON exports and iCalendar files.

Recurrence is never expanded here; a VEVENT carrying an RRULE contributes
its first occurrence only.
"""
from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from icalendar import Calendar

from .model import CalendarEvent
from .normalize import normalize_events
from .util.console import eprint

PathLike = Union[str, Path]


class EventSourceError(ValueError):
    """Raised when an event source cannot be read or has an unsupported shape."""


def _rows_from_json(obj: Any) -> List[Any]:
    if isinstance(obj, list):
        return obj
    if isinstance(obj, dict) and isinstance(obj.get("events"), list):
        return obj["events"]
    raise EventSourceError(f"expected a JSON list or an object with an 'events' list; got {type(obj).__name__}")


def load_events_from_json(path: PathLike, *, tz: Optional[dt.tzinfo] = None) -> List[CalendarEvent]:
    p = Path(path)
    try:
        obj = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as ex:
        raise EventSourceError(f"cannot read {p}: {ex}") from ex
    return normalize_events(_rows_from_json(obj), tz=tz)


def _first_category(component: Any) -> str:
    cats = component.get("categories")
    if isinstance(cats, list):
        cats = cats[0] if cats else None
    values = getattr(cats, "cats", None)
    if values:
        return str(values[0])
    return "other"


def _vevent_to_row(component: Any) -> Optional[Dict[str, Any]]:
    dtstart = component.get("dtstart")
    if not dtstart:
        return None
    start = dtstart.dt
    dtend = component.get("dtend")
    end = dtend.dt if dtend else None

    uid = str(component.get("uid") or "").strip()
    row: Dict[str, Any] = {
        "id": uid,
        "title": str(component.get("summary") or ""),
        "typeId": _first_category(component),
    }

    if isinstance(start, dt.date) and not isinstance(start, dt.datetime):
        # DATE values: DTEND is exclusive, so a one-day event ends on its start date.
        if isinstance(end, dt.datetime):
            last = max(end.date(), start)
        elif isinstance(end, dt.date) and end > start:
            last = end - dt.timedelta(days=1)
        else:
            last = start
        row["start"] = dt.datetime.combine(start, dt.time.min)
        row["end"] = dt.datetime.combine(last, dt.time.min)
        row["allDay"] = True
    else:
        row["start"] = start
        row["end"] = end if isinstance(end, dt.datetime) else start
        row["allDay"] = False

    rrule = component.get("rrule")
    if rrule:
        row["recurrenceRrule"] = rrule.to_ical().decode("utf-8")
    return row


def parse_ics_events(text: Union[str, bytes], *, tz: Optional[dt.tzinfo] = None) -> List[CalendarEvent]:
    try:
        cal = Calendar.from_ical(text)
    except ValueError as ex:
        raise EventSourceError(f"invalid iCalendar data: {ex}") from ex

    rows: List[Dict[str, Any]] = []
    recurring = 0
    for i, component in enumerate(cal.walk("VEVENT")):
        row = _vevent_to_row(component)
        if row is None:
            continue
        if not row["id"]:
            row["id"] = f"ics-{i}"
        if row.get("recurrenceRrule"):
            recurring += 1
        rows.append(row)

    if recurring:
        eprint(f"[clubcal.sources] INFO: {recurring} recurring event(s) not expanded; first occurrence only")
    return normalize_events(rows, tz=tz)


def load_events_from_ics(path: PathLike, *, tz: Optional[dt.tzinfo] = None) -> List[CalendarEvent]:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as ex:
        raise EventSourceError(f"cannot read {p}: {ex}") from ex
    return parse_ics_events(data, tz=tz)


def load_events(path: PathLike, *, tz: Optional[dt.tzinfo] = None) -> List[CalendarEvent]:
    """Load events from a .json or .ics file, picked by extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return load_events_from_json(path, tz=tz)
    if suffix in {".ics", ".ical", ".ifb"}:
        return load_events_from_ics(path, tz=tz)
    raise EventSourceError(f"unsupported event file type: {suffix or '(none)'} (expected .json or .ics)")


__all__ = [
    "EventSourceError",
    "load_events_from_json",
    "parse_ics_events",
    "load_events_from_ics",
    "load_events",
]
