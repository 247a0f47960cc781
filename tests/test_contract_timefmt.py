from __future__ import annotations

import datetime as dt
import unittest

from clubcal.timefmt import (
    format_compact_time,
    format_compact_time_range,
    format_date_span,
    format_day_header,
    format_hour_label,
    format_month_header,
    format_week_header,
)


def _t(h: int, m: int = 0) -> dt.datetime:
    return dt.datetime(2026, 3, 3, h, m)


class TestCompactTimeContract(unittest.TestCase):
    def test_on_the_hour_drops_minutes(self) -> None:
        self.assertEqual(format_compact_time(_t(15)), "3p")
        self.assertEqual(format_compact_time(_t(9)), "9a")

    def test_minutes_are_zero_padded(self) -> None:
        self.assertEqual(format_compact_time(_t(15, 30)), "3:30p")
        self.assertEqual(format_compact_time(_t(7, 5)), "7:05a")

    def test_midnight_and_noon(self) -> None:
        self.assertEqual(format_compact_time(_t(0)), "12a")
        self.assertEqual(format_compact_time(_t(0, 5)), "12:05a")
        self.assertEqual(format_compact_time(_t(12)), "12p")

    def test_range_shares_meridiem_suffix(self) -> None:
        self.assertEqual(format_compact_time_range(_t(15), _t(17)), "3–5p")
        self.assertEqual(format_compact_time_range(_t(9, 15), _t(10, 45)), "9:15–10:45a")
        self.assertEqual(format_compact_time_range(_t(12), _t(13, 30)), "12–1:30p")

    def test_range_across_noon_keeps_both_suffixes(self) -> None:
        self.assertEqual(format_compact_time_range(_t(11, 30), _t(12)), "11:30a–12p")
        self.assertEqual(format_compact_time_range(_t(10), _t(14)), "10a–2p")


class TestCalendarLabelsContract(unittest.TestCase):
    def test_hour_gutter_labels(self) -> None:
        self.assertEqual(
            [format_hour_label(h) for h in (0, 6, 11, 12, 15, 23)],
            ["12 am", "6 am", "11 am", "12 pm", "3 pm", "11 pm"],
        )

    def test_headers(self) -> None:
        self.assertEqual(format_day_header(dt.date(2026, 3, 3)), "Tuesday, March 3, 2026")
        self.assertEqual(format_week_header(dt.date(2026, 3, 1), dt.date(2026, 3, 7)), "Mar 1 – Mar 7, 2026")
        self.assertEqual(format_month_header(dt.date(2026, 3, 15)), "March 2026")

    def test_week_header_across_year_uses_end_year(self) -> None:
        self.assertEqual(format_week_header(dt.date(2025, 12, 28), dt.date(2026, 1, 3)), "Dec 28 – Jan 3, 2026")

    def test_date_span(self) -> None:
        self.assertEqual(format_date_span(dt.date(2026, 1, 5), dt.date(2026, 1, 9)), "Jan 5 – Jan 9")


if __name__ == "__main__":
    unittest.main(verbosity=2)
