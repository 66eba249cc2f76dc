"""
Utility modules for the application
"""

from .logger import get_logger
from .config import get_config
from .error_handler import PriceForecasterError, InsufficientDataError, DataFetchError
from .helpers import next_business_day, round_price

__all__ = [
    'get_logger', 'get_config',
    'PriceForecasterError', 'InsufficientDataError', 'DataFetchError',
    'next_business_day', 'round_price'
]
