"""
Exception types raised by the forecasting engine and its data adapters
"""


class PriceForecasterError(Exception):
    """Base class for all application errors."""
    pass


class InsufficientDataError(PriceForecasterError, ValueError):
    """Raised when a series is shorter than a model's required look-back."""

    def __init__(self, model_name: str, required: int, available: int):
        self.model_name = model_name
        self.required = required
        self.available = available
        super().__init__(
            f"Not enough data points for {model_name}. "
            f"Need at least {required} points, got {available}."
        )


class DataFetchError(PriceForecasterError):
    """Raised when data fetching operations fail."""
    pass
