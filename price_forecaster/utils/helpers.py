from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

import pandas as pd

DateLike = Union[date, datetime, pd.Timestamp, str]

_CENT = Decimal('0.01')


def round_price(value: float) -> float:
    """Round to 2 decimals, half away from zero on the exact binary value"""
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def to_date(value: DateLike) -> date:
    """Normalise timestamps, datetimes and ISO strings to a calendar date"""
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, datetime):
        return value.date()
    return value


def is_business_day(day: date) -> bool:
    """Check if a day falls Monday to Friday"""
    # Saturday = 5, Sunday = 6
    return day.weekday() not in [5, 6]


def next_business_day(last_date: DateLike, offset: int) -> date:
    """
    Get the date `offset` business days after `last_date`

    Only weekends are skipped, no holiday calendar is applied.

    Args:
        last_date: Last historical date
        offset: Number of business days to advance

    Returns:
        The business day reached after counting `offset` weekdays
    """
    current = to_date(last_date)
    added = 0
    while added < offset:
        current += timedelta(days=1)
        if is_business_day(current):
            added += 1
    return current
