# clubcal/util/tz.py
"""Timezone handling for event ingest.

Layout works on naive wall-clock datetimes only; this module turns the
`--tz` / CLUBCAL_TZ setting into a tzinfo and reads aware instants as wall
clock in it.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")

LOCAL = "local"


def normalize_tz_name(name: Optional[str]) -> str:
    """'local' for empty/system, 'UTC' for UTC/Z/GMT, anything else stripped as-is."""
    s = (name or "").strip()
    low = s.lower()
    if not s or low in {"local", "system"}:
        return LOCAL
    if low in {"utc", "z", "gmt"}:
        return "UTC"
    return s


def _fixed_offset(sign: str, hh: str, mm: str) -> dt.tzinfo:
    hours, minutes = int(hh), int(mm)
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid timezone offset: {sign}{hh}:{mm}")
    delta = dt.timedelta(hours=hours, minutes=minutes)
    return dt.timezone(-delta if sign == "-" else delta)


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a club timezone setting: local, UTC, +HH:MM offsets or IANA names.

    Raises ValueError when the name cannot be resolved.
    """
    tz_name = normalize_tz_name(name)
    if tz_name == "UTC":
        return dt.timezone.utc
    if tz_name == LOCAL:
        return dt.datetime.now().astimezone().tzinfo or dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        return _fixed_offset(*m.groups())

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def today_date(tz: dt.tzinfo) -> dt.date:
    return dt.datetime.now(tz=tz).date()


def to_wall_clock(value: dt.datetime, tz: dt.tzinfo) -> dt.datetime:
    """Return the naive local wall-clock reading of `value` in `tz`.

    Naive inputs are already wall clock and pass through unchanged.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


__all__ = [
    "normalize_tz_name",
    "resolve_tz",
    "today_date",
    "to_wall_clock",
]
