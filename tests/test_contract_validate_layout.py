from __future__ import annotations

import datetime as dt
import unittest

from clubcal.bands import get_multi_day_segments
from clubcal.bench import make_synthetic_events
from clubcal.classify import events_for_day, is_timed_single_day
from clubcal.columns import compute_event_layout
from clubcal.model import CalendarEvent, ColumnAssignment, MultiDaySegment
from clubcal.validate import LayoutValidationError, assert_valid_layout, validate_column_layout, validate_segments
from clubcal.views import month_weeks


def _t(h: int, m: int = 0) -> dt.datetime:
    return dt.datetime(2026, 3, 3, h, m)


class TestValidateLayoutContract(unittest.TestCase):
    def test_computed_layouts_validate_for_synthetic_month(self) -> None:
        evs = make_synthetic_events(800, start=dt.date(2026, 3, 1), days=35, seed=5)
        weeks = month_weeks(dt.date(2026, 3, 1))
        for week in weeks:
            for d in week:
                timed = [ev for ev in events_for_day(evs, d) if is_timed_single_day(ev)]
                assert_valid_layout(timed, compute_event_layout(timed))
        assert_valid_layout([], {}, get_multi_day_segments(evs, weeks))

    def test_detects_overlap_in_shared_column(self) -> None:
        a = CalendarEvent(id="a", start=_t(9), end=_t(10))
        b = CalendarEvent(id="b", start=_t(9, 30), end=_t(10, 30))
        broken = {"a": ColumnAssignment(0, 2), "b": ColumnAssignment(0, 2)}
        errs = validate_column_layout([a, b], broken)
        self.assertTrue(any("overlap in column 0" in e for e in errs), errs)

        with self.assertRaises(LayoutValidationError) as cm:
            assert_valid_layout([a, b], broken)
        self.assertIn("Layout validation failed", str(cm.exception))

    def test_detects_mixed_widths_and_missing_assignments(self) -> None:
        a = CalendarEvent(id="a", start=_t(9), end=_t(10))
        b = CalendarEvent(id="b", start=_t(9, 30), end=_t(10, 30))
        errs = validate_column_layout([a, b], {"a": ColumnAssignment(0, 2), "b": ColumnAssignment(1, 3)})
        self.assertTrue(any("mixed num_columns" in e for e in errs), errs)

        errs = validate_column_layout([a, b], {"a": ColumnAssignment(0, 1)})
        self.assertEqual(errs, ["columns: missing assignment for 'b'"])

    def test_detects_band_collisions(self) -> None:
        x = CalendarEvent(id="x", start=dt.datetime(2026, 3, 1), end=dt.datetime(2026, 3, 4), all_day=True)
        y = CalendarEvent(id="y", start=dt.datetime(2026, 3, 4), end=dt.datetime(2026, 3, 6), all_day=True)
        segs = [
            MultiDaySegment(x, 0, 0, 0, 3, True, True),
            MultiDaySegment(y, 0, 0, 3, 5, True, True),
        ]
        errs = validate_segments(segs)
        self.assertEqual(len(errs), 1)
        self.assertIn("share band 0", errs[0])

        self.assertEqual(validate_segments([MultiDaySegment(x, 0, 0, 0, 3, True, True)]), [])
        self.assertTrue(validate_segments([MultiDaySegment(x, 0, 0, 5, 7, True, True)]))


if __name__ == "__main__":
    unittest.main(verbosity=2)
