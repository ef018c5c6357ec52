"""
Reservation pricing
"""

import math
from datetime import date, datetime, time, timedelta
from typing import Union

from utils.helpers import parse_iso_datetime

DateLike = Union[str, date, datetime]

ONE_DAY = timedelta(days=1)


def parse_reservation_date(value: DateLike) -> datetime:
    """Accept an ISO date, an ISO date-time, or a date/datetime object"""
    if isinstance(value, datetime):
        return parse_iso_datetime(value.isoformat())
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return parse_iso_datetime(value)


def billable_days(start: DateLike, end: DateLike) -> int:
    """
    Whole days charged for a rental window.

    Any started day is charged in full, and a zero-length window is billed as one
    day. Raises ValueError when the window ends before it starts.
    """
    start_at = parse_reservation_date(start)
    end_at = parse_reservation_date(end)
    if end_at < start_at:
        raise ValueError(f"end date {end_at.isoformat()} is before start date {start_at.isoformat()}")
    return max(1, math.ceil((end_at - start_at) / ONE_DAY))


def reservation_cost(price_per_day: float, start: DateLike, end: DateLike) -> float:
    """Total cost: price per day times billable days"""
    return price_per_day * billable_days(start, end)
