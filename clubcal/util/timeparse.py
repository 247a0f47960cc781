from __future__ import annotations

import datetime as dt
import re
from typing import Optional

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def parse_instant(s: object) -> Optional[dt.datetime]:
    """Parse an ISO date or datetime string.

    Accepts a trailing "Z" for UTC. Date-only strings become midnight.
    Returns None for anything unparsable.
    """
    if isinstance(s, dt.datetime):
        return s
    if isinstance(s, dt.date):
        return dt.datetime(s.year, s.month, s.day)
    if not isinstance(s, str):
        return None
    ss = s.strip()
    if not ss:
        return None
    if _DATE_ONLY_RE.match(ss):
        try:
            return dt.datetime.combine(parse_date_yyyy_mm_dd(ss), dt.time.min)
        except ValueError:
            return None
    try:
        return dt.datetime.fromisoformat(ss.replace("Z", "+00:00"))
    except ValueError:
        return None
