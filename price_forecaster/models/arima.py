"""
Simplified ARIMA forecasting model

AR and MA coefficients are fixed at 1/p and 1/q rather than estimated, so the
model reduces to equal-weight averaging of lagged differenced values and lagged
residuals. Predictions are made on the differenced series and then mapped back
to price scale.
"""

from collections import deque
from typing import List, Sequence

import numpy as np

from .base import unpack_series, require_points, validate_horizon
from .types import ForecastingModel, PredictionResult, TimeSeriesPoint
from ..utils.helpers import next_business_day, round_price
from ..utils.logger import get_logger

logger = get_logger('models')


def difference(values: Sequence[float], d: int) -> List[float]:
    """Apply first-order differencing `d` times"""
    if d == 0:
        return list(values)
    return np.diff(np.asarray(values, dtype=float), n=d).tolist()


def _weighted_lags(coefficients: List[float], lagged) -> float:
    """Sum coefficient[j] * lagged[-j-1] over the lags available"""
    total = 0.0
    for j in range(min(len(coefficients), len(lagged))):
        total += coefficients[j] * lagged[-j - 1]
    return total


def arima_predict(series: Sequence[TimeSeriesPoint],
                  p: int = 3,
                  d: int = 1,
                  q: int = 1,
                  forecast_days: int = 7) -> List[PredictionResult]:
    """
    Backtest and extrapolate the simplified ARIMA(p, d, q) model

    Args:
        series: Ascending daily closes
        p: AR order
        d: Differencing order
        q: MA order
        forecast_days: Number of business days to forecast

    Returns:
        Backtest results followed by `forecast_days` forecast results

    Raises:
        InsufficientDataError: If the series has fewer than max(p, q) + d + 1 points
    """
    if p < 1 or q < 1:
        raise ValueError(f"AR and MA orders must be at least 1, got p={p}, q={q}")
    if d < 0:
        raise ValueError(f"Differencing order must be non-negative, got d={d}")
    validate_horizon(forecast_days)
    start = max(p, q)
    require_points(ForecastingModel.ARIMA, series, start + d + 1)

    dates, closes = unpack_series(series)
    diff_series = difference(closes, d)

    ar_coefficients = [1 / p] * p
    ma_coefficients = [1 / q] * q

    residuals: List[float] = []
    diff_predictions: List[float] = []

    for i in range(start, len(diff_series)):
        prediction = (_weighted_lags(ar_coefficients, diff_series[i - p:i])
                      + _weighted_lags(ma_coefficients, residuals))
        diff_predictions.append(prediction)
        residuals.append(diff_series[i] - prediction)

    results = []
    # Price-scale predictions: backtest values unrounded, forecast values rounded
    reconstructed: List[float] = []

    for k, prediction in enumerate(diff_predictions):
        index = k + start + d
        value = prediction
        for j in range(d):
            value += closes[index - j - 1]
        reconstructed.append(value)

        results.append(PredictionResult(
            date=dates[index],
            actual=closes[index],
            predicted=round_price(value),
            model_name=ForecastingModel.ARIMA
        ))

    # Windows keep their seeded length; future residuals are taken as zero
    recent_predictions = deque(diff_predictions[-p:], maxlen=len(diff_predictions[-p:]))
    recent_residuals = deque(residuals[-q:], maxlen=len(residuals[-q:]))
    recent_actuals = closes[-d:] if d > 0 else []

    for step in range(forecast_days):
        diff_prediction = (_weighted_lags(ar_coefficients, recent_predictions)
                           + _weighted_lags(ma_coefficients, recent_residuals))

        value = diff_prediction
        for j in range(d):
            if step - j >= 0:
                value += reconstructed[-j - 1]
            else:
                value += recent_actuals[-(j - step) - 1]

        prediction = round_price(value)
        reconstructed.append(prediction)

        results.append(PredictionResult(
            date=next_business_day(dates[-1], step + 1),
            actual=None,
            predicted=prediction,
            model_name=ForecastingModel.ARIMA
        ))

        recent_predictions.append(diff_prediction)
        recent_residuals.append(0.0)

    logger.debug(
        f"ARIMA({p},{d},{q}): {len(diff_predictions)} backtest, "
        f"{forecast_days} forecast points"
    )
    return results
