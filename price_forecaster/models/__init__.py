"""
Forecasting models and the value objects they produce
"""

from .types import (
    ForecastingModel, TimeSeriesPoint, PredictionResult, ModelMetrics, ModelRecommendation
)
from .moving_average import moving_average_predict
from .exponential_smoothing import exponential_smoothing_predict
from .arima import arima_predict

__all__ = [
    'ForecastingModel', 'TimeSeriesPoint', 'PredictionResult', 'ModelMetrics',
    'ModelRecommendation', 'moving_average_predict', 'exponential_smoothing_predict',
    'arima_predict'
]
