"""
Input handling shared by the forecasting models
"""

from typing import List, Sequence, Tuple
from datetime import date

from .types import ForecastingModel, TimeSeriesPoint
from ..utils.error_handler import InsufficientDataError
from ..utils.helpers import to_date


def unpack_series(series: Sequence[TimeSeriesPoint]) -> Tuple[List[date], List[float]]:
    """Split an ascending series into parallel date and close lists"""
    dates = [to_date(point.date) for point in series]
    closes = [float(point.close) for point in series]
    return dates, closes


def require_points(model: ForecastingModel, series: Sequence[TimeSeriesPoint], required: int):
    """Raise InsufficientDataError when the series is shorter than `required`"""
    if len(series) < required:
        raise InsufficientDataError(model.value, required, len(series))


def validate_horizon(forecast_days: int):
    if forecast_days < 0:
        raise ValueError(f"forecast_days must be non-negative, got {forecast_days}")
