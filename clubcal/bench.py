from __future__ import annotations

import datetime as dt
import random
from typing import List
from uuid import NAMESPACE_DNS, uuid5

from .model import CalendarEvent, EventLocation

_TYPE_POOL = ["league", "bonspiel", "practice", "maintenance", "social", "other"]


def make_synthetic_events(
    n_events: int,
    *,
    start: dt.date,
    days: int = 42,
    seed: int = 1,
    multi_day_every: int = 9,
    all_day_every: int = 13,
) -> List[CalendarEvent]:
    """Deterministic event set for perf budgets and fuzz-style invariant tests.

    Every `multi_day_every`-th event spans 1-9 extra days; every
    `all_day_every`-th is all-day. The rest are timed 15-240 minute events
    starting on 15-minute boundaries.
    """
    if n_events < 0:
        raise ValueError("n_events must be >= 0")
    if days < 1:
        raise ValueError("days must be >= 1")

    rng = random.Random(seed)
    out: List[CalendarEvent] = []
    for i in range(n_events):
        uid = str(uuid5(NAMESPACE_DNS, f"clubcal.synthetic:{seed}:{i}"))
        day = start + dt.timedelta(days=rng.randrange(days))
        typ = _TYPE_POOL[(i + seed) % len(_TYPE_POOL)]
        locs = (EventLocation(type="sheet", sheet_id=1 + i % 6, sheet_name=f"Sheet {1 + i % 6}"),) if i % 2 == 0 else ()

        if all_day_every > 0 and i % all_day_every == 0:
            span = rng.randrange(0, 4)
            s = dt.datetime.combine(day, dt.time.min)
            e = dt.datetime.combine(day + dt.timedelta(days=span), dt.time.min)
            out.append(CalendarEvent(id=uid, start=s, end=e, all_day=True, type_id=typ, title=f"all-day {i}", locations=locs))
            continue

        if multi_day_every > 0 and i % multi_day_every == 0:
            s = dt.datetime.combine(day, dt.time(hour=rng.randrange(8, 20)))
            e = s + dt.timedelta(days=rng.randrange(1, 10), hours=rng.randrange(0, 4))
            out.append(CalendarEvent(id=uid, start=s, end=e, type_id=typ, title=f"multi {i}", locations=locs))
            continue

        minute_of_day = rng.randrange(0, 22 * 4) * 15
        s = dt.datetime.combine(day, dt.time.min) + dt.timedelta(minutes=minute_of_day)
        dur = rng.randrange(1, 17) * 15
        e = min(s + dt.timedelta(minutes=dur), dt.datetime.combine(day, dt.time(23, 59)))
        out.append(CalendarEvent(id=uid, start=s, end=e, type_id=typ, title=f"timed {i}", locations=locs))
    return out


__all__ = ["make_synthetic_events"]
