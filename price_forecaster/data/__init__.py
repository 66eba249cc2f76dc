from .market_data import MarketDataManager, to_time_series, get_stock_metrics

__all__ = ['MarketDataManager', 'to_time_series', 'get_stock_metrics']
