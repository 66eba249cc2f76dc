"""
Exponential Smoothing forecasting model
"""

from typing import List, Sequence

from .base import unpack_series, require_points, validate_horizon
from .types import ForecastingModel, PredictionResult, TimeSeriesPoint
from ..utils.helpers import next_business_day, round_price
from ..utils.logger import get_logger

logger = get_logger('models')

MIN_POINTS = 2


def exponential_smoothing_predict(series: Sequence[TimeSeriesPoint],
                                  alpha: float = 0.3,
                                  forecast_days: int = 7) -> List[PredictionResult]:
    """
    Simple exponential smoothing with one-step-ahead backtest

    The prediction for index i is formed from closes up to i-1 only.
    Forecast steps smooth against their own previous output.

    Args:
        series: Ascending daily closes
        alpha: Weight of the most recent observation, in [0, 1]
        forecast_days: Number of business days to forecast
    """
    if not 0 <= alpha <= 1:
        raise ValueError(f"alpha must be within [0, 1], got {alpha}")
    validate_horizon(forecast_days)
    require_points(ForecastingModel.EXPONENTIAL_SMOOTHING, series, MIN_POINTS)

    dates, closes = unpack_series(series)
    results = []

    forecast = closes[0]
    for i in range(1, len(closes)):
        forecast = alpha * closes[i - 1] + (1 - alpha) * forecast
        results.append(PredictionResult(
            date=dates[i],
            actual=closes[i],
            predicted=round_price(forecast),
            model_name=ForecastingModel.EXPONENTIAL_SMOOTHING
        ))

    last_actual = closes[-1]
    for step in range(forecast_days):
        forecast = alpha * last_actual + (1 - alpha) * forecast
        prediction = round_price(forecast)
        results.append(PredictionResult(
            date=next_business_day(dates[-1], step + 1),
            actual=None,
            predicted=prediction,
            model_name=ForecastingModel.EXPONENTIAL_SMOOTHING
        ))
        last_actual = prediction

    logger.debug(f"Exponential smoothing (alpha={alpha}): {len(results)} points")
    return results
