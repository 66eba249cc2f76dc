import pytest
import pandas as pd
from datetime import date, datetime, timedelta

from price_forecaster.utils.helpers import next_business_day, round_price, to_date, is_business_day


def test_next_business_day_within_week():
    # Monday -> Tuesday
    assert next_business_day(date(2024, 1, 1), 1) == date(2024, 1, 2)
    assert next_business_day(date(2024, 1, 1), 4) == date(2024, 1, 5)


def test_next_business_day_skips_weekend(last_friday):
    assert next_business_day(last_friday, 1) == date(2024, 1, 8)
    assert next_business_day(last_friday, 5) == date(2024, 1, 12)
    assert next_business_day(last_friday, 6) == date(2024, 1, 15)


def test_next_business_day_from_weekend():
    saturday = date(2024, 1, 6)
    assert next_business_day(saturday, 1) == date(2024, 1, 8)


def test_next_business_day_zero_offset():
    assert next_business_day(date(2024, 1, 6), 0) == date(2024, 1, 6)


def test_next_business_day_accepts_other_date_types():
    expected = date(2024, 1, 8)
    assert next_business_day('2024-01-05', 1) == expected
    assert next_business_day(pd.Timestamp('2024-01-05'), 1) == expected
    assert next_business_day(datetime(2024, 1, 5, 16, 0), 1) == expected


def test_consecutive_offsets_never_land_on_weekend():
    start = date(2024, 3, 13)
    days = [next_business_day(start, i) for i in range(1, 30)]
    assert all(is_business_day(d) for d in days)
    assert all(b > a for a, b in zip(days, days[1:]))
    # 29 business days span at least 5 full weeks
    assert days[-1] - start >= timedelta(days=35)


@pytest.mark.parametrize('value, expected', [
    (1.005, 1.0),     # stored just below 1.005
    (0.125, 0.13),    # exact binary half rounds up
    (-0.125, -0.13),
    (2.675, 2.67),
    (100.0, 100.0),
    (14.333333333333334, 14.33),
])
def test_round_price(value, expected):
    assert round_price(value) == expected


def test_round_price_is_idempotent():
    for value in [0.1, 1 / 3, 2.675, 99.995, 123456.789]:
        once = round_price(value)
        assert round_price(once) == once


def test_to_date():
    assert to_date('2024-02-29') == date(2024, 2, 29)
    assert to_date('2024-02-29T10:00:00') == date(2024, 2, 29)
    assert to_date(date(2024, 2, 29)) == date(2024, 2, 29)
