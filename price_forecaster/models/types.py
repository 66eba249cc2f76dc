"""Value objects shared by the forecasting models and the model selector."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Mapping, Optional


class ForecastingModel(Enum):
    """Available forecasting models, in tie-break priority order"""
    MOVING_AVERAGE = 'Moving Average'
    EXPONENTIAL_SMOOTHING = 'Exponential Smoothing'
    ARIMA = 'ARIMA'


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Daily close supplied by the history provider"""
    date: date
    close: float


@dataclass(frozen=True)
class PredictionResult:
    """Single backtest or forecast point produced by a model"""
    date: date
    actual: Optional[float]  # None for forecast-horizon dates
    predicted: float  # Rounded to 2 decimals
    model_name: ForecastingModel

    @property
    def is_forecast(self) -> bool:
        return self.actual is None


@dataclass(frozen=True)
class ModelMetrics:
    """Accuracy of a model over its backtest points"""
    mae: float
    mpe: float


@dataclass(frozen=True)
class ModelRecommendation:
    """Lowest-MAE model alongside every model's metrics"""
    best_model: ForecastingModel
    metrics: Mapping[ForecastingModel, ModelMetrics] = field(default_factory=dict)
