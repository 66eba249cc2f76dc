"""
Moving Average forecasting model
"""

from collections import deque
from typing import List, Sequence

from .base import unpack_series, require_points, validate_horizon
from .types import ForecastingModel, PredictionResult, TimeSeriesPoint
from ..utils.helpers import next_business_day, round_price
from ..utils.logger import get_logger

logger = get_logger('models')


def _mean(values) -> float:
    return sum(values) / len(values)


def moving_average_predict(series: Sequence[TimeSeriesPoint],
                           window_size: int = 5,
                           forecast_days: int = 7) -> List[PredictionResult]:
    """
    Predict each close as the mean of the `window_size` closes before it

    Backtest points pair every index from `window_size` onward with its actual
    close. Forecast points extrapolate past the last date, feeding each rounded
    prediction back into the window.

    Args:
        series: Ascending daily closes
        window_size: Number of preceding closes averaged per prediction
        forecast_days: Number of business days to forecast

    Returns:
        Backtest results followed by `forecast_days` forecast results

    Raises:
        InsufficientDataError: If the series has fewer than `window_size` points
    """
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")
    validate_horizon(forecast_days)
    require_points(ForecastingModel.MOVING_AVERAGE, series, window_size)

    dates, closes = unpack_series(series)
    results = []

    for i in range(window_size, len(closes)):
        results.append(PredictionResult(
            date=dates[i],
            actual=closes[i],
            predicted=round_price(_mean(closes[i - window_size:i])),
            model_name=ForecastingModel.MOVING_AVERAGE
        ))

    window = deque(closes[-window_size:], maxlen=window_size)
    for step in range(forecast_days):
        prediction = round_price(_mean(window))
        results.append(PredictionResult(
            date=next_business_day(dates[-1], step + 1),
            actual=None,
            predicted=prediction,
            model_name=ForecastingModel.MOVING_AVERAGE
        ))
        # Oldest value drops out automatically
        window.append(prediction)

    logger.debug(
        f"Moving average (window={window_size}): "
        f"{len(results) - forecast_days} backtest, {forecast_days} forecast points"
    )
    return results
