"""
Accuracy metrics over the backtest portion of a model's predictions
"""

from typing import Sequence, Tuple

import numpy as np
from sklearn.metrics import mean_absolute_error

from ..models.types import ModelMetrics, PredictionResult
from ..utils.helpers import round_price


def _backtest_pairs(results: Sequence[PredictionResult]) -> Tuple[np.ndarray, np.ndarray]:
    """Actual and predicted arrays for entries that carry an actual value"""
    pairs = [(r.actual, r.predicted) for r in results if r.actual is not None]
    if not pairs:
        return np.empty(0), np.empty(0)
    actual, predicted = zip(*pairs)
    return np.asarray(actual, dtype=float), np.asarray(predicted, dtype=float)


def calculate_mae(results: Sequence[PredictionResult]) -> float:
    """Mean Absolute Error, 0 when no backtest points exist"""
    y_true, y_pred = _backtest_pairs(results)
    if len(y_true) == 0:
        return 0.0
    return round_price(mean_absolute_error(y_true, y_pred))


def calculate_mpe(results: Sequence[PredictionResult]) -> float:
    """
    Mean Percentage Error, signed, in percent

    Positive values mean the model over-predicts on average. Actual values
    must be non-zero.
    """
    y_true, y_pred = _backtest_pairs(results)
    if len(y_true) == 0:
        return 0.0
    return round_price(np.mean((y_pred - y_true) / y_true * 100))


def calculate_metrics(results: Sequence[PredictionResult]) -> ModelMetrics:
    return ModelMetrics(mae=calculate_mae(results), mpe=calculate_mpe(results))
