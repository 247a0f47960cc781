from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .model import VIEWS, ColumnAssignment, DayLayout, MonthLayout, WeekLayout
from .serialize import dumps_layout
from .sources import EventSourceError, load_events
from .util.timeparse import parse_date_yyyy_mm_dd
from .util.tz import normalize_tz_name, resolve_tz, today_date
from .validate import validate_column_layout, validate_segments
from .views import layout_view


def _check_layout(layout) -> list[str]:
    errs: list[str] = []
    if isinstance(layout, DayLayout):
        days = [layout]
    elif isinstance(layout, WeekLayout):
        days = layout.days
    else:
        days = []
    for day in days:
        timed = [p.event for p in day.timed]
        assigned = {p.event.id: ColumnAssignment(column=p.column, num_columns=p.num_columns) for p in day.timed}
        errs.extend(validate_column_layout(timed, assigned))
    if isinstance(layout, (WeekLayout, MonthLayout)):
        errs.extend(validate_segments(layout.segments))
    return errs


def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(
        description="Compute calendar layout (columns, visible hours, multi-day bands) as JSON."
    )
    ap.add_argument("--events", required=True, help="Events file: .json (API rows) or .ics")
    ap.add_argument("--view", default="month", choices=list(VIEWS), help="Calendar view (default: month)")
    ap.add_argument("--date", default=None, help="Anchor date YYYY-MM-DD (default: today in --tz)")
    ap.add_argument(
        "--tz",
        default=os.getenv("CLUBCAL_TZ", "local"),
        help="Wall-clock timezone for timezone-aware instants (default: env CLUBCAL_TZ or 'local')",
    )
    ap.add_argument("--on-ice-only", action="store_true", help="Only lay out events held on a sheet")
    ap.add_argument("--check", action="store_true", help="Validate layout invariants; exit 1 on violation")
    ap.add_argument("--pretty", action="store_true", help="Indent JSON output")
    ap.add_argument("--out", default=None, help="Output JSON path (default: stdout)")

    args = ap.parse_args(argv)

    try:
        tzinfo = resolve_tz(normalize_tz_name(args.tz))
    except ValueError as e:
        raise SystemExit(f"Invalid --tz value: {e}")

    if args.date:
        try:
            anchor = parse_date_yyyy_mm_dd(args.date)
        except ValueError:
            raise SystemExit(f"Invalid --date value: {args.date!r} (expected YYYY-MM-DD)")
    else:
        anchor = today_date(tzinfo)

    try:
        events = load_events(args.events, tz=tzinfo)
    except EventSourceError as e:
        raise SystemExit(f"Failed to load events: {e}")

    layout = layout_view(events, args.view, anchor, on_ice_only=bool(args.on_ice_only))

    if args.check:
        errs = _check_layout(layout)
        if errs:
            for msg in errs:
                print(f"[clubcal] ERROR: {msg}", file=sys.stderr)
            raise SystemExit(1)

    text = dumps_layout(layout, pretty=bool(args.pretty))
    if args.out:
        out_path = Path(args.out)
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise SystemExit(f"Cannot create output directory '{out_path.parent}': {e}")
        out_path.write_text(text + "\n", encoding="utf-8")
        print(str(out_path.resolve()))
    else:
        print(text)


if __name__ == "__main__":
    main()
