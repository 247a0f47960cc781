from __future__ import annotations

import datetime as dt
import unittest

from clubcal.bands import (
    get_multi_day_segments,
    max_band_count,
    ranges_intersect,
    reserved_slot_count,
    sort_all_day_events,
    week_band_counts,
)
from clubcal.bench import make_synthetic_events
from clubcal.model import CalendarEvent
from clubcal.validate import validate_segments
from clubcal.views import month_weeks

# March 2026 starts on a Sunday: rows are Mar 1-7, 8-14, 15-21, 22-28, Mar 29-Apr 4.
MARCH = month_weeks(dt.date(2026, 3, 1))


def _all_day(uid: str, first: int, last: int, month: int = 3) -> CalendarEvent:
    return CalendarEvent(
        id=uid,
        start=dt.datetime(2026, month, first),
        end=dt.datetime(2026, month, last),
        all_day=True,
    )


def _by_id(segments, week_index: int):
    return {s.event.id: s for s in segments if s.week_index == week_index}


class TestMultiDaySegmentsContract(unittest.TestCase):
    def test_ten_day_event_splits_into_two_rows(self) -> None:
        ev = _all_day("camp", 5, 14)
        segs = get_multi_day_segments([ev], MARCH)

        self.assertEqual(len(segs), 2)
        first, second = segs
        self.assertEqual((first.week_index, first.start_col, first.end_col), (0, 4, 6))
        self.assertTrue(first.round_left)
        self.assertFalse(first.round_right)
        self.assertEqual((second.week_index, second.start_col, second.end_col), (1, 0, 6))
        self.assertFalse(second.round_left)
        self.assertTrue(second.round_right)

    def test_three_row_event_rounds_only_at_true_ends(self) -> None:
        segs = get_multi_day_segments([_all_day("x", 5, 18)], MARCH)
        got = [(s.week_index, s.start_col, s.end_col, s.round_left, s.round_right) for s in segs]
        self.assertEqual(
            got,
            [
                (0, 4, 6, True, False),
                (1, 0, 6, False, False),
                (2, 0, 3, False, True),
            ],
        )

    def test_saturday_to_sunday_event_gets_two_one_column_segments(self) -> None:
        segs = get_multi_day_segments([_all_day("wknd", 7, 8)], MARCH)
        got = [(s.week_index, s.start_col, s.end_col, s.round_left, s.round_right) for s in segs]
        self.assertEqual(got, [(0, 6, 6, True, False), (1, 0, 0, False, True)])

    def test_event_spilling_outside_grid_is_clipped(self) -> None:
        ev = CalendarEvent(id="long", start=dt.datetime(2026, 2, 20), end=dt.datetime(2026, 4, 10), all_day=True)
        segs = get_multi_day_segments([ev], MARCH)
        self.assertEqual(len(segs), len(MARCH))
        self.assertTrue(all(s.start_col == 0 and s.end_col == 6 for s in segs))
        self.assertFalse(any(s.round_left or s.round_right for s in segs))

    def test_single_day_events_are_ignored(self) -> None:
        timed = CalendarEvent(id="t", start=dt.datetime(2026, 3, 3, 9), end=dt.datetime(2026, 3, 3, 10))
        self.assertEqual(get_multi_day_segments([timed, _all_day("d", 4, 4)], MARCH), [])

    def test_timed_event_crossing_midnight_is_multi_day(self) -> None:
        ev = CalendarEvent(id="late", start=dt.datetime(2026, 3, 3, 22), end=dt.datetime(2026, 3, 4, 1))
        segs = get_multi_day_segments([ev], MARCH)
        self.assertEqual([(s.start_col, s.end_col) for s in segs], [(2, 3)])

    def test_shared_column_forces_a_new_band(self) -> None:
        evs = [_all_day("d", 1, 2), _all_day("a", 2, 4), _all_day("b", 4, 6), _all_day("c", 5, 7)]
        week0 = _by_id(get_multi_day_segments(evs, MARCH), 0)
        self.assertEqual({k: v.band_index for k, v in week0.items()}, {"d": 0, "a": 1, "b": 0, "c": 1})

    def test_adjacent_columns_share_a_band(self) -> None:
        evs = [_all_day("a", 1, 3), _all_day("b", 4, 6)]
        week0 = _by_id(get_multi_day_segments(evs, MARCH), 0)
        self.assertEqual(week0["a"].band_index, 0)
        self.assertEqual(week0["b"].band_index, 0)

    def test_continuing_segments_are_placed_first_longest_first(self) -> None:
        evs = [_all_day("r", 8, 10), _all_day("p", 6, 9), _all_day("q", 4, 12)]
        week1 = _by_id(get_multi_day_segments(evs, MARCH), 1)
        self.assertEqual({k: v.band_index for k, v in week1.items()}, {"q": 0, "p": 1, "r": 2})

    def test_equal_starts_place_longer_event_first(self) -> None:
        evs = [_all_day("short", 2, 3), _all_day("long", 2, 6)]
        week0 = _by_id(get_multi_day_segments(evs, MARCH), 0)
        self.assertEqual(week0["long"].band_index, 0)
        self.assertEqual(week0["short"].band_index, 1)

    def test_input_order_does_not_change_bands(self) -> None:
        evs = [_all_day("a", 1, 3), _all_day("b", 1, 3), _all_day("c", 2, 9), _all_day("d", 6, 16)]
        expected = get_multi_day_segments(evs, MARCH)
        self.assertEqual(get_multi_day_segments(list(reversed(evs)), MARCH), expected)

    def test_week_rows_must_have_seven_days(self) -> None:
        with self.assertRaises(ValueError):
            get_multi_day_segments([_all_day("a", 1, 3)], [MARCH[0][:6]])

    def test_band_counts(self) -> None:
        evs = [_all_day("d", 1, 2), _all_day("a", 2, 4), _all_day("b", 4, 6), _all_day("x", 15, 18)]
        segs = get_multi_day_segments(evs, MARCH)
        self.assertEqual(week_band_counts(segs, len(MARCH)), [2, 0, 1, 0, 0])
        self.assertEqual(max_band_count(segs), 2)
        self.assertEqual(max_band_count([]), 0)

    def test_synthetic_events_never_collide_within_a_band(self) -> None:
        evs = make_synthetic_events(600, start=dt.date(2026, 2, 25), days=45, seed=11)
        segs = get_multi_day_segments(evs, MARCH)
        self.assertGreater(len(segs), 0)
        self.assertEqual(validate_segments(segs), [])
        for s in segs:
            self.assertTrue(0 <= s.start_col <= s.end_col <= 6)


class TestAllDayHelpersContract(unittest.TestCase):
    def test_ranges_intersect_treats_columns_as_cells(self) -> None:
        self.assertTrue(ranges_intersect(0, 3, 3, 6))
        self.assertFalse(ranges_intersect(0, 2, 3, 6))
        self.assertTrue(ranges_intersect(2, 2, 0, 6))

    def test_reserved_slot_count_counts_covering_multi_day_events(self) -> None:
        evs = [_all_day("a", 2, 5), _all_day("b", 5, 8), _all_day("single", 5, 5)]
        self.assertEqual(reserved_slot_count(evs, dt.date(2026, 3, 5)), 2)
        self.assertEqual(reserved_slot_count(evs, dt.date(2026, 3, 3)), 1)
        self.assertEqual(reserved_slot_count(evs, dt.date(2026, 3, 9)), 0)

    def test_sort_all_day_events_puts_longest_multi_day_first(self) -> None:
        single = _all_day("single", 5, 5)
        short = _all_day("short", 4, 5)
        long_ev = _all_day("long", 1, 9)
        got = [ev.id for ev in sort_all_day_events([single, short, long_ev])]
        self.assertEqual(got, ["long", "short", "single"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
