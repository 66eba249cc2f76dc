"""
Accuracy evaluation and model selection
"""

from .metrics import calculate_mae, calculate_mpe, calculate_metrics
from .forecast import (
    Forecaster, ForecastReport, generate_all_predictions, determine_best_model, split_results
)

__all__ = [
    'calculate_mae', 'calculate_mpe', 'calculate_metrics', 'Forecaster', 'ForecastReport',
    'generate_all_predictions', 'determine_best_model', 'split_results'
]
