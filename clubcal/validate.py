"""Layout invariant checks (library-facing)."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .bands import WEEK_LEN, ranges_intersect
from .columns import overlap_groups
from .model import CalendarEvent, ColumnAssignment, MultiDaySegment


class LayoutValidationError(ValueError):
    """Raised when a computed layout breaks a layout invariant."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_column_layout(events: Sequence[CalendarEvent], layout: Dict[str, ColumnAssignment]) -> List[str]:
    errs: List[str] = []
    for ev in events:
        _require(ev.id in layout, f"columns: missing assignment for {ev.id!r}", errs)
    if errs:
        return errs

    for gi, group in enumerate(overlap_groups(events)):
        widths = {layout[ev.id].num_columns for ev in group}
        _require(len(widths) == 1, f"columns: group {gi} has mixed num_columns {sorted(widths)}", errs)
        for ev in group:
            a = layout[ev.id]
            _require(a.num_columns >= 1, f"columns: {ev.id!r} num_columns < 1", errs)
            _require(0 <= a.column < a.num_columns, f"columns: {ev.id!r} column {a.column} out of range", errs)

        for i, x in enumerate(group):
            for y in group[i + 1:]:
                if layout[x.id].column != layout[y.id].column:
                    continue
                disjoint = x.end <= y.start or y.end <= x.start
                _require(disjoint, f"columns: {x.id!r} and {y.id!r} overlap in column {layout[x.id].column}", errs)
    return errs


def validate_segments(segments: Iterable[MultiDaySegment]) -> List[str]:
    errs: List[str] = []
    segs = list(segments)
    for s in segs:
        ok = 0 <= s.start_col <= s.end_col < WEEK_LEN
        _require(ok, f"bands: {s.event.id!r} week {s.week_index} bad columns {s.start_col}..{s.end_col}", errs)
        _require(s.band_index >= 0, f"bands: {s.event.id!r} week {s.week_index} negative band", errs)

    for i, a in enumerate(segs):
        for b in segs[i + 1:]:
            if a.week_index != b.week_index or a.band_index != b.band_index:
                continue
            clash = ranges_intersect(a.start_col, a.end_col, b.start_col, b.end_col)
            _require(
                not clash,
                f"bands: {a.event.id!r} and {b.event.id!r} share band {a.band_index} in week {a.week_index}",
                errs,
            )
    return errs


def assert_valid_layout(
    events: Sequence[CalendarEvent],
    layout: Dict[str, ColumnAssignment],
    segments: Iterable[MultiDaySegment] = (),
) -> None:
    errs = validate_column_layout(events, layout) + validate_segments(segments)
    if errs:
        raise LayoutValidationError("Layout validation failed:\n- " + "\n- ".join(errs))


__all__ = [
    "LayoutValidationError",
    "validate_column_layout",
    "validate_segments",
    "assert_valid_layout",
]
