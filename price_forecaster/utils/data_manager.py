"""
Data manager singleton tying the history provider to the forecaster
"""

from typing import Dict, List, Optional
import pandas as pd
from ..analysis.forecast import Forecaster, ForecastReport
from ..data.market_data import MarketDataManager, to_time_series, get_stock_metrics
from ..models.types import TimeSeriesPoint
from . import get_logger

logger = get_logger()

class DataManager:
    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(DataManager, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize data manager with provider and forecaster"""
        if not self._initialized:
            self._market_data = MarketDataManager()
            self._forecaster = Forecaster()
            self._current_data = None
            self._current_symbol = None
            self._initialized = True

    @classmethod
    def get_instance(cls) -> 'DataManager':
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = DataManager()
        return cls._instance

    def cleanup(self):
        """Clean up resources"""
        try:
            if self._forecaster:
                self._forecaster.cleanup()
            self._current_data = None
            self._current_symbol = None
        except Exception as e:
            logger.error(f"Error during cleanup: {str(e)}")

    @property
    def current_symbol(self) -> Optional[str]:
        """Get current symbol being analyzed"""
        return self._current_symbol

    def fetch_data(self, symbol: str, period: Optional[str] = None) -> pd.DataFrame:
        """Fetch daily bars for a symbol and make them current"""
        try:
            if not symbol or not isinstance(symbol, str):
                raise ValueError("Invalid symbol provided")

            symbol = symbol.strip().upper()
            data = self._market_data.get_stock_data(symbol, period=period)

            self._current_data = data
            self._current_symbol = symbol
            return data

        except Exception as e:
            logger.error(f"Error fetching data for {symbol}: {str(e)}")
            raise

    def get_series(self, data: Optional[pd.DataFrame] = None) -> List[TimeSeriesPoint]:
        """Closes of the given or current bars as time series points"""
        df = data if data is not None else self._current_data
        if df is None:
            raise ValueError("No data available for forecasting")
        return to_time_series(df)

    def generate_forecast(self, data: Optional[pd.DataFrame] = None, days: Optional[int] = None,
                          training_window: Optional[int] = None) -> ForecastReport:
        """Run every model over the given or current bars"""
        try:
            series = self.get_series(data)
            return self._forecaster.generate_forecast(series, days=days,
                                                      training_window=training_window)
        except Exception as e:
            logger.error(f"Error generating forecast: {str(e)}")
            raise

    def get_summary_stats(self, data: Optional[pd.DataFrame] = None) -> Dict:
        """Get price summary for the given or current bars"""
        try:
            df = data if data is not None else self._current_data
            if df is None:
                raise ValueError("No data available for analysis")

            return get_stock_metrics(df, self._current_symbol or 'UNKNOWN')

        except Exception as e:
            logger.error(f"Error getting summary stats: {str(e)}")
            return {}

# Create a singleton instance
_instance = None

def get_data_manager() -> DataManager:
    """Get the data manager instance"""
    global _instance
    if _instance is None:
        _instance = DataManager()
    return _instance
