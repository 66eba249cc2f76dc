"""
Daily price forecasting with moving average, exponential smoothing and simplified ARIMA models
"""

from .models import (
    ForecastingModel, TimeSeriesPoint, PredictionResult, ModelMetrics, ModelRecommendation,
    moving_average_predict, exponential_smoothing_predict, arima_predict
)
from .analysis import (
    Forecaster, ForecastReport, calculate_mae, calculate_mpe, generate_all_predictions,
    determine_best_model
)
from .utils.error_handler import InsufficientDataError

__version__ = '0.1.0'

__all__ = [
    'ForecastingModel', 'TimeSeriesPoint', 'PredictionResult', 'ModelMetrics',
    'ModelRecommendation', 'moving_average_predict', 'exponential_smoothing_predict',
    'arima_predict', 'Forecaster', 'ForecastReport', 'calculate_mae', 'calculate_mpe',
    'generate_all_predictions', 'determine_best_model', 'InsufficientDataError'
]
