"""clubcal.api

Stable *library* entrypoint for clubcal.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Iterable, Optional

from clubcal.bands import (
    get_multi_day_segments,
    max_band_count,
    reserved_slot_count,
    sort_all_day_events,
    week_band_counts,
)
from clubcal.classify import classify_event, events_for_day, is_all_day, is_multi_day, is_on_ice
from clubcal.columns import compute_event_layout, max_concurrency, overlap_groups
from clubcal.hours import event_display_hours, get_visible_hours
from clubcal.model import (
    CalendarEvent,
    ColumnAssignment,
    DayLayout,
    DisplayRange,
    EventLocation,
    MonthLayout,
    MultiDaySegment,
    WeekLayout,
)
from clubcal.normalize import normalize_event, normalize_events
from clubcal.serialize import layout_to_dict
from clubcal.sources import EventSourceError, load_events, parse_ics_events
from clubcal.timefmt import format_compact_time, format_compact_time_range
from clubcal.validate import LayoutValidationError, assert_valid_layout
from clubcal.views import (
    display_range,
    layout_day,
    layout_month,
    layout_view,
    layout_week,
    month_weeks,
    parse_date_param,
    parse_view_param,
    shift_anchor,
)


def layout_from_rows(
    rows: Iterable[Any],
    *,
    view: Optional[str] = None,
    date: Optional[str] = None,
    tz: Optional[dt.tzinfo] = None,
    on_ice_only: bool = False,
) -> Dict[str, Any]:
    """Normalize API-shaped rows and return the JSON-ready layout for a view.

    `view` and `date` take the same loose values as the calendar URL
    parameters: unknown views fall back to month, bad dates to today.
    """
    events = normalize_events(rows, tz=tz)
    layout = layout_view(events, parse_view_param(view), parse_date_param(date), on_ice_only=on_ice_only)
    return layout_to_dict(layout)


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "CalendarEvent",
    "ColumnAssignment",
    "DayLayout",
    "DisplayRange",
    "EventLocation",
    "EventSourceError",
    "LayoutValidationError",
    "MonthLayout",
    "MultiDaySegment",
    "WeekLayout",
    "assert_valid_layout",
    "classify_event",
    "compute_event_layout",
    "display_range",
    "event_display_hours",
    "events_for_day",
    "format_compact_time",
    "format_compact_time_range",
    "get_multi_day_segments",
    "get_visible_hours",
    "is_all_day",
    "is_multi_day",
    "is_on_ice",
    "layout_day",
    "layout_from_rows",
    "layout_month",
    "layout_to_dict",
    "layout_view",
    "layout_week",
    "load_events",
    "max_band_count",
    "max_concurrency",
    "month_weeks",
    "normalize_event",
    "normalize_events",
    "overlap_groups",
    "parse_date_param",
    "parse_ics_events",
    "parse_view_param",
    "reserved_slot_count",
    "shift_anchor",
    "sort_all_day_events",
    "week_band_counts",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
