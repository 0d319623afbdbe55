import os
import sys
from datetime import datetime

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from timeshare.errors import InvalidArgument
from timeshare.window import (
    TimeRange,
    TimeWindow,
    overlap_ms,
    parse_range,
    resolve_window,
    start_of_week,
)


def _ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


# Wednesday afternoon, local time
NOW = _ms(datetime(2025, 3, 12, 15, 30, 45))


def test_today_starts_at_local_midnight():
    w = resolve_window(TimeRange.TODAY, NOW)
    assert w.start_ms == _ms(datetime(2025, 3, 12))
    assert w.end_ms == NOW


def test_week_starts_on_monday():
    w = resolve_window("Week", NOW)
    assert w.start_ms == _ms(datetime(2025, 3, 10))
    assert datetime.fromtimestamp(w.start_ms / 1000).weekday() == 0


def test_week_on_sunday_goes_back_six_days():
    sunday = _ms(datetime(2025, 3, 16, 9, 0))
    assert start_of_week(sunday) == _ms(datetime(2025, 3, 10))


def test_week_on_monday_is_same_day():
    monday = _ms(datetime(2025, 3, 10, 0, 0, 1))
    assert start_of_week(monday) == _ms(datetime(2025, 3, 10))


def test_month_and_year():
    assert resolve_window(TimeRange.MONTH, NOW).start_ms == _ms(datetime(2025, 3, 1))
    assert resolve_window(TimeRange.YEAR, NOW).start_ms == _ms(datetime(2025, 1, 1))


def test_all_starts_at_epoch():
    w = resolve_window(TimeRange.ALL, NOW)
    assert w == TimeWindow(start_ms=0, end_ms=NOW)


def test_end_is_always_now():
    for r in TimeRange:
        assert resolve_window(r, NOW).end_ms == NOW


def test_unknown_range_is_rejected():
    with pytest.raises(InvalidArgument):
        resolve_window("Fortnight", NOW)
    with pytest.raises(ValueError):
        parse_range("today")


def test_window_contains_is_half_open():
    w = TimeWindow(start_ms=1000, end_ms=2000)
    assert w.contains(1000)
    assert not w.contains(2000)
    assert w.duration_ms == 1000


class TestOverlap:
    def test_partial(self):
        assert overlap_ms(0, 1000, 500, 1500) == 500

    def test_touching_intervals_do_not_overlap(self):
        assert overlap_ms(0, 1000, 1000, 2000) == 0

    def test_contained(self):
        assert overlap_ms(100, 200, 0, 1000) == 100

    def test_disjoint_is_never_negative(self):
        assert overlap_ms(0, 10, 50, 60) == 0
        assert overlap_ms(50, 60, 0, 10) == 0

    def test_inverted_interval(self):
        assert overlap_ms(500, 100, 0, 1000) == 0

    def test_symmetric(self):
        assert overlap_ms(0, 700, 300, 900) == overlap_ms(300, 900, 0, 700)
