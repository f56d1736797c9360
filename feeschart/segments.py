from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, List, NamedTuple, Sequence, Tuple

DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24
MIN_CHART_DAYS = 4
MAX_CHART_DAYS = 90


class Granularity(Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"

    @property
    def duration(self) -> timedelta:
        if self is Granularity.HOUR:
            return timedelta(hours=1)
        if self is Granularity.WEEK:
            return timedelta(weeks=1)
        return timedelta(days=1)


class TimeWindow(NamedTuple):
    start: datetime
    end: datetime


class BucketSeries(NamedTuple):
    fees: List[int]
    counts: List[int]


def select_granularity(days: int) -> Tuple[Granularity, int]:
    """Pick the bucket unit and the number of buckets for a chart of `days`."""
    if days > MAX_CHART_DAYS:
        return Granularity.WEEK, days // DAYS_PER_WEEK
    elif days < MIN_CHART_DAYS:
        return Granularity.HOUR, days * HOURS_PER_DAY
    else:
        return Granularity.DAY, days


def trailing_window(days: int, clock: Callable[[], datetime] = datetime.now) -> TimeWindow:
    """The `days` long window ending now.

    Days are subtracted on wall time, so a daylight saving change inside the
    window keeps the start at the same clock time as the end. A naive clock
    reading is taken as system local time.
    """
    end = clock()
    start = end - timedelta(days=days)
    if end.tzinfo is None:
        end, start = end.astimezone(), start.astimezone()
    return TimeWindow(start, end)


def bucket_index(timestamp: datetime, start: datetime, unit: Granularity, segments: int) -> int:
    index = (timestamp - start) // unit.duration
    return min(max(index, 0), segments - 1)


def fees_for_segments(forwards: Sequence, unit: Granularity, segments: int, start: datetime) -> BucketSeries:
    """Sum fees and count forwards per bucket.

    Forwards past the last bucket (clock skew between fetching and
    bucketing) land in the last bucket, earlier ones in the first.
    """
    fees = [0] * segments
    counts = [0] * segments
    for forward in forwards:
        i = bucket_index(forward.timestamp, start, unit, segments)
        fees[i] += forward.fee
        counts[i] += 1
    return BucketSeries(fees, counts)


def total_earned(forwards: Sequence) -> int:
    return sum(forward.fee for forward in forwards)
