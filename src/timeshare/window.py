"""
Time windows for the range selector (Today / Week / Month / Year / All).

Windows are half-open ``[start_ms, end_ms)`` in epoch milliseconds. Calendar
boundaries are computed in local time; weeks start on Monday.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time as dtime, timedelta
from enum import Enum
from typing import Union

from .errors import InvalidArgument


class TimeRange(str, Enum):
    TODAY = "Today"
    WEEK = "Week"
    MONTH = "Month"
    YEAR = "Year"
    ALL = "All"


@dataclass(frozen=True)
class TimeWindow:
    start_ms: float
    end_ms: float

    @property
    def duration_ms(self) -> float:
        return max(0, self.end_ms - self.start_ms)

    def contains(self, ts_ms: float) -> bool:
        return self.start_ms <= ts_ms < self.end_ms


def _local_date(ts_ms: float) -> date:
    return datetime.fromtimestamp(ts_ms / 1000.0).date()


def _midnight_ms(d: date) -> int:
    return int(datetime.combine(d, dtime.min).timestamp() * 1000)


def start_of_day(ts_ms: float) -> int:
    return _midnight_ms(_local_date(ts_ms))


def start_of_week(ts_ms: float) -> int:
    d = _local_date(ts_ms)
    # weekday(): Monday == 0
    return _midnight_ms(d - timedelta(days=d.weekday()))


def start_of_month(ts_ms: float) -> int:
    return _midnight_ms(_local_date(ts_ms).replace(day=1))


def start_of_year(ts_ms: float) -> int:
    return _midnight_ms(_local_date(ts_ms).replace(month=1, day=1))


_RANGE_STARTS = {
    TimeRange.TODAY: start_of_day,
    TimeRange.WEEK: start_of_week,
    TimeRange.MONTH: start_of_month,
    TimeRange.YEAR: start_of_year,
}


def parse_range(value: Union[TimeRange, str]) -> TimeRange:
    """Coerce a selector (enum member or its label) into a TimeRange."""
    if isinstance(value, TimeRange):
        return value
    try:
        return TimeRange(value)
    except ValueError:
        raise InvalidArgument(f"unknown range selector: {value!r}") from None


def resolve_window(range_: Union[TimeRange, str], now_ms: float) -> TimeWindow:
    """Return ``[start, now)`` for the selected range; ``All`` starts at the epoch."""
    selected = parse_range(range_)
    if selected is TimeRange.ALL:
        return TimeWindow(start_ms=0, end_ms=now_ms)
    return TimeWindow(start_ms=_RANGE_STARTS[selected](now_ms), end_ms=now_ms)


def overlap_ms(a_start: float, a_end: float, b_start: float, b_end: float) -> float:
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    return max(0, end - start)
