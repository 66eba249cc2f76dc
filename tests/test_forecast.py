import pytest
import pandas as pd
from datetime import date

from price_forecaster.analysis.forecast import (
    Forecaster, ForecastReport, generate_all_predictions, determine_best_model,
    split_results, results_to_dataframe, metrics_to_dataframe
)
from price_forecaster.models.types import ForecastingModel, PredictionResult
from price_forecaster.utils.error_handler import InsufficientDataError
from price_forecaster.utils.config import get_config
from price_forecaster.utils.helpers import is_business_day


def _results(model, pairs):
    return [
        PredictionResult(date=date(2024, 1, i + 1), actual=a, predicted=p, model_name=model)
        for i, (a, p) in enumerate(pairs)
    ]


@pytest.fixture
def forecaster():
    instance = Forecaster()
    yield instance
    instance.cleanup()


def test_all_models_in_priority_order(price_series):
    predictions = generate_all_predictions(price_series, forecast_days=7)
    assert list(predictions) == [
        ForecastingModel.MOVING_AVERAGE,
        ForecastingModel.EXPONENTIAL_SMOOTHING,
        ForecastingModel.ARIMA,
    ]


def test_canonical_parameters(price_series):
    predictions = generate_all_predictions(price_series, forecast_days=7)
    backtest_lengths = {model: len(split_results(r)[0]) for model, r in predictions.items()}

    assert backtest_lengths[ForecastingModel.MOVING_AVERAGE] == len(price_series) - 7
    assert backtest_lengths[ForecastingModel.EXPONENTIAL_SMOOTHING] == len(price_series) - 1
    assert backtest_lengths[ForecastingModel.ARIMA] == len(price_series) - 4


def test_forecast_horizon_per_model(price_series):
    last_date = price_series[-1].date
    for model, results in generate_all_predictions(price_series, forecast_days=7).items():
        backtest, forecast = split_results(results)
        assert len(forecast) == 7, model
        assert all(r.date <= last_date for r in backtest)
        assert all(r.date > last_date for r in forecast)
        dates = [r.date for r in forecast]
        assert all(b > a for a, b in zip(dates, dates[1:]))
        assert all(is_business_day(d) for d in dates)


def test_parallel_matches_serial(price_series):
    serial = generate_all_predictions(price_series, forecast_days=5)
    parallel = generate_all_predictions(price_series, forecast_days=5, parallel=True)
    assert serial == parallel


def test_model_params_override(price_series):
    predictions = generate_all_predictions(
        price_series, forecast_days=3,
        model_params={ForecastingModel.MOVING_AVERAGE: {'window_size': 20}}
    )
    backtest, _ = split_results(predictions[ForecastingModel.MOVING_AVERAGE])
    assert len(backtest) == len(price_series) - 20


def test_short_series_fails(make_series):
    # Moving average needs 7 points with canonical parameters
    with pytest.raises(InsufficientDataError):
        generate_all_predictions(make_series([10, 11, 12, 13, 14, 15]))


def test_best_model_has_lowest_mae():
    predictions = {
        ForecastingModel.MOVING_AVERAGE: _results(ForecastingModel.MOVING_AVERAGE, [(10.0, 12.0)]),
        ForecastingModel.EXPONENTIAL_SMOOTHING: _results(ForecastingModel.EXPONENTIAL_SMOOTHING, [(10.0, 11.0)]),
        ForecastingModel.ARIMA: _results(ForecastingModel.ARIMA, [(10.0, 13.0), (None, 9.0)]),
    }
    recommendation = determine_best_model(predictions)

    assert recommendation.best_model == ForecastingModel.EXPONENTIAL_SMOOTHING
    assert recommendation.metrics[ForecastingModel.MOVING_AVERAGE].mae == 2.0
    assert recommendation.metrics[ForecastingModel.ARIMA].mae == 3.0
    assert recommendation.metrics[ForecastingModel.ARIMA].mpe == 30.0


def test_tie_resolves_by_priority():
    predictions = {
        ForecastingModel.ARIMA: _results(ForecastingModel.ARIMA, [(10.0, 11.0)]),
        ForecastingModel.EXPONENTIAL_SMOOTHING: _results(ForecastingModel.EXPONENTIAL_SMOOTHING, [(10.0, 11.0)]),
        ForecastingModel.MOVING_AVERAGE: _results(ForecastingModel.MOVING_AVERAGE, [(10.0, 12.0)]),
    }
    assert determine_best_model(predictions).best_model == ForecastingModel.EXPONENTIAL_SMOOTHING


def test_constant_series_prefers_moving_average(make_series):
    recommendation = determine_best_model(generate_all_predictions(make_series([50.0] * 12)))
    assert all(m.mae == 0.0 for m in recommendation.metrics.values())
    assert recommendation.best_model == ForecastingModel.MOVING_AVERAGE


def test_trend_series_prefers_arima(trend_series):
    recommendation = determine_best_model(generate_all_predictions(trend_series))
    assert recommendation.metrics[ForecastingModel.ARIMA].mae == 0.0
    assert recommendation.best_model == ForecastingModel.ARIMA


def test_empty_predictions():
    with pytest.raises(ValueError):
        determine_best_model({})


def test_split_results():
    results = _results(ForecastingModel.ARIMA, [(1.0, 1.0), (2.0, 2.0), (None, 3.0)])
    backtest, forecast = split_results(results)
    assert len(backtest) == 2
    assert len(forecast) == 1

    assert split_results(results[:2]) == (results[:2], [])


def test_results_to_dataframe(price_series):
    results = generate_all_predictions(price_series, forecast_days=4)[ForecastingModel.ARIMA]
    df = results_to_dataframe(results)

    assert list(df.columns) == ['date', 'actual', 'predicted', 'model', 'is_forecast']
    assert len(df) == len(results)
    assert df['is_forecast'].sum() == 4
    assert df.loc[df['is_forecast'], 'actual'].isna().all()
    assert pd.api.types.is_datetime64_any_dtype(df['date'])


def test_metrics_to_dataframe(trend_series):
    recommendation = determine_best_model(generate_all_predictions(trend_series))
    df = metrics_to_dataframe(recommendation)
    assert list(df.index) == ['Moving Average', 'Exponential Smoothing', 'ARIMA']
    assert df.loc['ARIMA', 'best']


def test_forecaster_report(forecaster, price_series):
    report = forecaster.generate_forecast(price_series, days=7, training_window=90)

    assert isinstance(report, ForecastReport)
    assert report.training_points == 90
    assert report.forecast_days == 7
    assert report.best_model in report.recommendation.metrics
    assert report.best_predictions is report.predictions[report.best_model]

    maes = [m.mae for m in report.recommendation.metrics.values()]
    assert report.recommendation.metrics[report.best_model].mae == min(maes)


def test_forecaster_trims_to_training_window(forecaster, price_series):
    report = forecaster.generate_forecast(price_series, days=3, training_window=30)
    backtest, _ = split_results(report.predictions[ForecastingModel.EXPONENTIAL_SMOOTHING])

    assert report.training_points == 30
    assert len(backtest) == 29
    assert backtest[-1].date == price_series[-1].date


def test_forecaster_uses_full_history_when_window_disabled(forecaster, price_series):
    report = forecaster.generate_forecast(price_series, days=3, training_window=0)
    assert report.training_points == len(price_series)


def test_forecaster_clamps_horizon(forecaster, price_series):
    assert forecaster.generate_forecast(price_series, days=90).forecast_days == 30
    assert forecaster.generate_forecast(price_series, days=0).forecast_days == 1


def test_forecaster_caches_reports(forecaster, price_series):
    first = forecaster.generate_forecast(price_series, days=5)
    second = forecaster.generate_forecast(price_series, days=5)
    assert first is second


def test_forecaster_cache_follows_model_settings(forecaster, price_series):
    config = get_config()
    first = forecaster.generate_forecast(price_series, days=5)
    try:
        config.config['models']['moving_average']['window_size'] = 20
        second = forecaster.generate_forecast(price_series, days=5)
    finally:
        config.reset()

    assert first is not second
    backtest, _ = split_results(second.predictions[ForecastingModel.MOVING_AVERAGE])
    assert len(backtest) == second.training_points - 20
    assert second.predictions[ForecastingModel.ARIMA] == first.predictions[ForecastingModel.ARIMA]


def test_forecaster_cache_follows_default_horizon(forecaster, price_series):
    config = get_config()
    first = forecaster.generate_forecast(price_series)
    try:
        config.config['forecast']['days'] = 3
        second = forecaster.generate_forecast(price_series)
    finally:
        config.reset()

    assert first.forecast_days == 7
    assert second.forecast_days == 3


def test_cached_report_is_read_only(forecaster, price_series):
    report = forecaster.generate_forecast(price_series, days=5)

    with pytest.raises(TypeError):
        report.predictions[ForecastingModel.ARIMA] = ()
    with pytest.raises(TypeError):
        report.recommendation.metrics[ForecastingModel.ARIMA] = None
    assert isinstance(report.best_predictions, tuple)

    again = forecaster.generate_forecast(price_series, days=5)
    assert again is report
    assert len(again.predictions) == 3


def test_forecaster_parallel(forecaster, price_series):
    serial = forecaster.generate_forecast(price_series, days=5, parallel=False)
    parallel = forecaster.generate_forecast(price_series, days=5, parallel=True)
    assert dict(serial.predictions) == dict(parallel.predictions)

    # The pool is recreated after cleanup
    forecaster.cleanup()
    again = forecaster.generate_forecast(price_series, days=5, parallel=True)
    assert dict(again.predictions) == dict(serial.predictions)


def test_forecaster_propagates_insufficient_data(forecaster, make_series):
    with pytest.raises(InsufficientDataError):
        forecaster.generate_forecast(make_series([10, 11, 12]), days=5)
