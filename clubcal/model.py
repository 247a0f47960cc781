# clubcal/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

CalendarView = str  # "day" | "week" | "month"
VIEWS: Tuple[str, ...] = ("day", "week", "month")

SINGLE_DAY = "single-day"
MULTI_DAY = "multi-day"

LOCATION_TYPES: Tuple[str, ...] = ("sheet", "warm-room", "exterior", "offsite", "virtual")


@dataclass(frozen=True)
class EventLocation:
    type: str  # "sheet" | "warm-room" | "exterior" | "offsite" | "virtual"
    sheet_id: Optional[int] = None
    sheet_name: Optional[str] = None


@dataclass(frozen=True)
class CalendarEvent:
    id: str
    start: dt.datetime  # naive local wall clock
    end: dt.datetime
    all_day: bool = False
    type_id: str = "other"
    title: str = ""
    locations: Tuple[EventLocation, ...] = ()
    recurrence_rrule: Optional[str] = None
    created_by: Optional[str] = None


@dataclass(frozen=True)
class ColumnAssignment:
    column: int
    num_columns: int


@dataclass(frozen=True)
class MultiDaySegment:
    event: CalendarEvent
    week_index: int
    band_index: int
    start_col: int
    end_col: int
    round_left: bool
    round_right: bool


@dataclass(frozen=True)
class DisplayRange:
    view: CalendarView
    anchor: dt.date
    start: dt.date  # inclusive
    end: dt.date    # inclusive
    weeks: Tuple[Tuple[dt.date, ...], ...]
    header_label: str

    @property
    def days(self) -> Tuple[dt.date, ...]:
        if self.view == "day":
            return (self.anchor,)
        return tuple(d for week in self.weeks for d in week)


@dataclass(frozen=True)
class TimedPlacement:
    event: CalendarEvent
    column: int
    num_columns: int
    start_hour: float
    end_hour: float


@dataclass
class DayLayout:
    day: dt.date
    visible_hours: List[int]
    timed: List[TimedPlacement] = field(default_factory=list)
    all_day: List[CalendarEvent] = field(default_factory=list)
    range: Optional[DisplayRange] = None


@dataclass
class WeekLayout:
    range: DisplayRange
    visible_hours: List[int]
    days: List[DayLayout] = field(default_factory=list)
    segments: List[MultiDaySegment] = field(default_factory=list)
    band_count: int = 0


@dataclass
class MonthLayout:
    range: DisplayRange
    segments: List[MultiDaySegment] = field(default_factory=list)
    band_counts: List[int] = field(default_factory=list)
    max_bands: int = 0
    day_events: Dict[dt.date, List[CalendarEvent]] = field(default_factory=dict)
    reserved_slots: Dict[dt.date, int] = field(default_factory=dict)


__all__ = [
    "CalendarView",
    "VIEWS",
    "SINGLE_DAY",
    "MULTI_DAY",
    "LOCATION_TYPES",
    "EventLocation",
    "CalendarEvent",
    "ColumnAssignment",
    "MultiDaySegment",
    "DisplayRange",
    "TimedPlacement",
    "DayLayout",
    "WeekLayout",
    "MonthLayout",
]
