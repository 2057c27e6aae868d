from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

DEFAULT_MAX_INTERVAL = timedelta(minutes=10)


class IntervalStatus(str, Enum):
    FIRST = "first"
    VALID = "valid"
    GAP = "gap"


def classify_interval(
    previous: Optional[datetime],
    current: datetime,
    max_interval: timedelta = DEFAULT_MAX_INTERVAL,
) -> IntervalStatus:
    """Classify the time between two consecutive samples.

    FIRST: there is no previous sample to delta against.
    GAP: longer than max_interval, or the clock went backwards.
    """
    if previous is None:
        return IntervalStatus.FIRST
    elapsed = current - previous
    if elapsed > max_interval or elapsed < timedelta(0):
        return IntervalStatus.GAP
    return IntervalStatus.VALID
