import os
import tempfile

# Keep logs and settings out of the working tree
os.environ.setdefault('PRICE_FORECASTER_HOME', tempfile.mkdtemp(prefix='price_forecaster_'))

import pytest
import pandas as pd
from datetime import date

from price_forecaster.models.types import TimeSeriesPoint


def build_series(closes, start='2024-01-01'):
    """Series of closes dated on consecutive business days"""
    dates = pd.bdate_range(start, periods=len(closes))
    return [TimeSeriesPoint(date=d.date(), close=float(c)) for d, c in zip(dates, closes)]


@pytest.fixture
def make_series():
    return build_series


@pytest.fixture
def constant_series():
    """Ten constant closes at 100"""
    return build_series([100.0] * 10)


@pytest.fixture
def trend_series():
    """Closes rising by exactly 1 per day"""
    return build_series(range(10, 30))


@pytest.fixture
def price_series():
    """A year of noisy but deterministic prices"""
    closes = [150 + 10 * ((i * 37) % 11) / 11 + i * 0.1 for i in range(120)]
    return build_series([round(c, 2) for c in closes])


@pytest.fixture
def last_friday():
    return date(2024, 1, 5)
