"""
Model selection: runs every forecasting model over the same history and ranks them by accuracy
"""

import functools
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from .metrics import calculate_metrics
from ..models.types import (
    ForecastingModel, ModelMetrics, ModelRecommendation, PredictionResult, TimeSeriesPoint
)
from ..models.moving_average import moving_average_predict
from ..models.exponential_smoothing import exponential_smoothing_predict
from ..models.arima import arima_predict
from ..utils import get_logger, get_config

logger = get_logger()
config = get_config()

PredictionMap = Dict[ForecastingModel, List[PredictionResult]]

MODEL_FUNCTIONS = {
    ForecastingModel.MOVING_AVERAGE: moving_average_predict,
    ForecastingModel.EXPONENTIAL_SMOOTHING: exponential_smoothing_predict,
    ForecastingModel.ARIMA: arima_predict,
}

# Canonical parameters used when comparing models
DEFAULT_MODEL_PARAMS = {
    ForecastingModel.MOVING_AVERAGE: {'window_size': 7},
    ForecastingModel.EXPONENTIAL_SMOOTHING: {'alpha': 0.3},
    ForecastingModel.ARIMA: {'p': 3, 'd': 1, 'q': 1},
}

_CONFIG_KEYS = {
    ForecastingModel.MOVING_AVERAGE: 'moving_average',
    ForecastingModel.EXPONENTIAL_SMOOTHING: 'exponential_smoothing',
    ForecastingModel.ARIMA: 'arima',
}


@dataclass(frozen=True)
class ForecastReport:
    """
    Predictions of every model plus the recommendation drawn from them

    Reports are shared between callers through the Forecaster cache, so the
    mappings are read-only proxies and each prediction list is a tuple.
    """
    predictions: Mapping[ForecastingModel, Tuple[PredictionResult, ...]]
    recommendation: ModelRecommendation
    forecast_days: int
    training_points: int

    @property
    def best_model(self) -> ForecastingModel:
        return self.recommendation.best_model

    @property
    def best_predictions(self) -> Tuple[PredictionResult, ...]:
        return self.predictions[self.recommendation.best_model]


def generate_all_predictions(series: Sequence[TimeSeriesPoint],
                             forecast_days: int = 7,
                             parallel: bool = False,
                             model_params: Optional[Dict[ForecastingModel, Dict[str, Any]]] = None,
                             executor: Optional[ThreadPoolExecutor] = None) -> PredictionMap:
    """
    Run every model over the same series and horizon

    Args:
        series: Ascending daily closes
        forecast_days: Forecast horizon shared by all models
        parallel: Run the models on a thread pool
        model_params: Per-model keyword overrides of the canonical parameters
        executor: Thread pool to reuse when running in parallel

    Returns:
        Dictionary of model to predictions, in priority order
    """
    params = {model: dict(DEFAULT_MODEL_PARAMS[model]) for model in ForecastingModel}
    for model, overrides in (model_params or {}).items():
        params[model].update(overrides)

    def run(model: ForecastingModel) -> List[PredictionResult]:
        return MODEL_FUNCTIONS[model](series, forecast_days=forecast_days, **params[model])

    if not parallel:
        return {model: run(model) for model in ForecastingModel}

    if executor is not None:
        futures = {model: executor.submit(run, model) for model in ForecastingModel}
        return {model: future.result() for model, future in futures.items()}

    with ThreadPoolExecutor(max_workers=len(MODEL_FUNCTIONS)) as pool:
        futures = {model: pool.submit(run, model) for model in ForecastingModel}
        return {model: future.result() for model, future in futures.items()}


def determine_best_model(predictions: PredictionMap) -> ModelRecommendation:
    """Pick the model with the strictly lowest MAE, earlier models winning ties"""
    metrics: Dict[ForecastingModel, ModelMetrics] = {
        model: calculate_metrics(predictions[model])
        for model in ForecastingModel if model in predictions
    }
    if not metrics:
        raise ValueError("No model predictions to evaluate")

    best_model = None
    lowest_mae = None
    for model, model_metrics in metrics.items():
        if lowest_mae is None or model_metrics.mae < lowest_mae:
            best_model = model
            lowest_mae = model_metrics.mae

    return ModelRecommendation(best_model=best_model, metrics=metrics)


def split_results(results: Sequence[PredictionResult]) -> Tuple[List[PredictionResult], List[PredictionResult]]:
    """Split a model's output into backtest and forecast portions"""
    for index, result in enumerate(results):
        if result.actual is None:
            return list(results[:index]), list(results[index:])
    return list(results), []


def results_to_dataframe(results: Sequence[PredictionResult]) -> pd.DataFrame:
    """Flatten prediction results into a DataFrame indexed by position"""
    return pd.DataFrame(
        [{
            'date': pd.Timestamp(r.date),
            'actual': r.actual,
            'predicted': r.predicted,
            'model': r.model_name.value,
            'is_forecast': r.is_forecast
        } for r in results],
        columns=['date', 'actual', 'predicted', 'model', 'is_forecast']
    )


def metrics_to_dataframe(recommendation: ModelRecommendation) -> pd.DataFrame:
    """Comparative accuracy table, one row per model"""
    rows = [{
        'model': model.value,
        'mae': m.mae,
        'mpe': m.mpe,
        'best': model == recommendation.best_model
    } for model, m in recommendation.metrics.items()]
    return pd.DataFrame(rows, columns=['model', 'mae', 'mpe', 'best']).set_index('model')


def cache_result(func):
    """Decorator for caching function results"""
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        frozen_args = tuple(tuple(a) if isinstance(a, list) else a for a in args)
        cache_key = (func.__name__, frozen_args, tuple(sorted(kwargs.items())))
        return self._get_cached_data(cache_key, lambda: func(self, *args, **kwargs))
    return wrapper


class Forecaster:
    def __init__(self, max_cache_size: int = 100):
        """Initialize forecaster with a shared thread pool and result cache"""
        self._cache = {}
        self._max_cache_size = max_cache_size
        self._thread_pool = None

    @property
    def thread_pool(self) -> ThreadPoolExecutor:
        if self._thread_pool is None:
            self._thread_pool = ThreadPoolExecutor(max_workers=len(MODEL_FUNCTIONS))
        return self._thread_pool

    def cleanup(self):
        """Clean up resources"""
        if self._thread_pool is not None:
            self._thread_pool.shutdown(wait=False)
            self._thread_pool = None
        self._cache.clear()

    def _clear_cache(self):
        """Clear cache if it gets too large"""
        if len(self._cache) > self._max_cache_size:
            self._cache.clear()

    def _get_cached_data(self, key, data_fn):
        """Get data from cache or compute it"""
        if key in self._cache:
            return self._cache[key]
        result = data_fn()
        self._clear_cache()
        self._cache[key] = result
        return result

    def _model_params(self) -> Tuple[Tuple[ForecastingModel, Tuple[Tuple[str, Any], ...]], ...]:
        """Per-model parameters from configuration, frozen so they can key the cache"""
        models_config = config.get('models') or {}
        return tuple(
            (model, tuple(sorted((models_config.get(key) or {}).items())))
            for model, key in _CONFIG_KEYS.items()
        )

    def _clamp_days(self, days: int) -> int:
        min_days = config.get('forecast', 'min_days') or 1
        max_days = config.get('forecast', 'max_days') or 30
        clamped = max(min_days, min(days, max_days))
        if clamped != days:
            logger.warning(f"Forecast horizon {days} outside [{min_days}, {max_days}], using {clamped}")
        return clamped

    def generate_forecast(self, series: Sequence[TimeSeriesPoint], days: Optional[int] = None,
                          training_window: Optional[int] = None,
                          parallel: Optional[bool] = None) -> ForecastReport:
        """
        Run all models over the most recent history and recommend the best one

        Args:
            series: Ascending daily closes from the history provider
            days: Forecast horizon, defaults to the configured horizon
            training_window: Number of most recent points to train on
            parallel: Run the models concurrently

        Returns:
            Read-only ForecastReport with every model's predictions and the recommendation
        """
        try:
            if days is None:
                days = config.get('forecast', 'days')
            if training_window is None:
                training_window = config.get('forecast', 'training_window')
            if parallel is None:
                parallel = bool(config.get('forecast', 'parallel'))

            days = self._clamp_days(days)
            history = tuple(series)
            if training_window and len(history) > training_window:
                history = history[-training_window:]

            return self._forecast(history, days, self._model_params(), parallel)

        except Exception as e:
            logger.error(f"Error generating forecast: {str(e)}")
            raise

    @cache_result
    def _forecast(self, history: Tuple[TimeSeriesPoint, ...], days: int,
                  model_params: Tuple[Tuple[ForecastingModel, Tuple[Tuple[str, Any], ...]], ...],
                  parallel: bool) -> ForecastReport:
        """Build a report from fully resolved inputs"""
        logger.debug(f"Forecasting {days} days from {len(history)} points")

        predictions = generate_all_predictions(
            history,
            forecast_days=days,
            parallel=parallel,
            model_params={model: dict(items) for model, items in model_params},
            executor=self.thread_pool if parallel else None
        )
        recommendation = determine_best_model(predictions)

        best = recommendation.metrics[recommendation.best_model]
        logger.info(
            f"Best model: {recommendation.best_model.value} "
            f"(MAE={best.mae:.2f}, MPE={best.mpe:.2f}%)"
        )

        return ForecastReport(
            predictions=MappingProxyType({model: tuple(results) for model, results in predictions.items()}),
            recommendation=ModelRecommendation(
                best_model=recommendation.best_model,
                metrics=MappingProxyType(dict(recommendation.metrics))
            ),
            forecast_days=days,
            training_points=len(history)
        )
