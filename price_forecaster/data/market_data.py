import yfinance as yf
import pandas as pd
from typing import Dict, List, Optional

from ..models.types import TimeSeriesPoint
from ..utils import get_logger, get_config
from ..utils.error_handler import DataFetchError
from ..utils.helpers import round_price, to_date

logger = get_logger('data')
config = get_config()


def to_time_series(df: pd.DataFrame, column: str = 'Close') -> List[TimeSeriesPoint]:
    """
    Convert daily bars into ascending time series points

    Rows with a missing or non-positive close are dropped.

    Args:
        df: Bars indexed by date
        column: Price column to use as the close
    """
    if column not in df.columns:
        raise DataFetchError(f"Missing required column: {column}")

    closes = df[column].dropna()
    closes = closes[closes > 0].sort_index()
    dropped = len(df) - len(closes)
    if dropped:
        logger.warning(f"Dropped {dropped} rows with missing or non-positive {column}")

    return [TimeSeriesPoint(date=to_date(index), close=float(value))
            for index, value in closes.items()]


def get_stock_metrics(df: pd.DataFrame, symbol: str) -> Dict:
    """Summarize the latest bar against the rest of the period"""
    if len(df) < 2:
        raise DataFetchError(f"Need at least 2 bars to summarize {symbol}")

    last_close = float(df['Close'].iloc[-1])
    previous_close = float(df['Close'].iloc[-2])
    change = round_price(last_close - previous_close)

    return {
        'symbol': symbol,
        'current_price': last_close,
        'change': change,
        'change_percent': round_price(change / previous_close * 100),
        'period_high': float(df['High'].max()) if 'High' in df.columns else None,
        'period_low': float(df['Low'].min()) if 'Low' in df.columns else None,
        'volume': int(df['Volume'].iloc[-1]) if 'Volume' in df.columns else None,
        'avg_volume': int(df['Volume'].mean()) if 'Volume' in df.columns else None,
    }


class MarketDataManager:
    def __init__(self):
        self.cache: Dict[str, pd.DataFrame] = {}

    def get_stock_data(self, symbol: str, period: Optional[str] = None,
                       interval: Optional[str] = None) -> pd.DataFrame:
        """
        Fetch stock data from Yahoo Finance

        Args:
            symbol: Stock ticker symbol
            period: Data period (1mo, 3mo, 6mo, 1y, 2y, 5y, 10y, ytd, max)
            interval: Data interval, daily bars are expected by the models
        """
        period = period or config.get('data', 'period')
        interval = interval or config.get('data', 'interval')
        cache_key = f"{symbol}_{period}_{interval}"

        if config.get('data', 'cache_enabled') and cache_key in self.cache:
            return self.cache[cache_key]

        try:
            stock = yf.Ticker(symbol)
            df = stock.history(period=period, interval=interval)
        except Exception as e:
            logger.error(f"Error fetching data for {symbol}: {str(e)}")
            raise DataFetchError(f"Failed to fetch data for {symbol}") from e

        if df is None or df.empty:
            raise DataFetchError(f"No data available for symbol: {symbol}")

        logger.debug(f"Fetched {len(df)} bars for {symbol}")
        self.cache[cache_key] = df
        return df

    def get_history(self, symbol: str, period: Optional[str] = None) -> List[TimeSeriesPoint]:
        """Fetch daily closes as time series points"""
        return to_time_series(self.get_stock_data(symbol, period=period))
