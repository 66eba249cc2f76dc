import argparse
import sys
from typing import List, Optional

from .analysis.forecast import metrics_to_dataframe, results_to_dataframe, split_results
from .utils import get_logger, get_config
from .utils.data_manager import get_data_manager

logger = get_logger()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    config = get_config()
    parser = argparse.ArgumentParser(
        description="Backtest and forecast daily closes with three simple models"
    )
    parser.add_argument('symbol', help="Stock ticker symbol, e.g. AAPL")
    parser.add_argument('--days', type=int, default=config.get('forecast', 'days'),
                        help="Number of business days to forecast")
    parser.add_argument('--window', type=int, default=config.get('forecast', 'training_window'),
                        help="Number of most recent closes to train on")
    parser.add_argument('--period', default=config.get('data', 'period'),
                        help="History period to download (1mo, 3mo, 6mo, 1y, ...)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the price forecasting application."""
    args = parse_args(argv)
    data_manager = get_data_manager()
    try:
        data_manager.fetch_data(args.symbol, period=args.period)
        symbol = data_manager.current_symbol
        summary = data_manager.get_summary_stats()
        if summary:
            logger.info(
                f"{summary['symbol']}: {summary['current_price']:.2f} "
                f"({summary['change']:+.2f}, {summary['change_percent']:+.2f}%)"
            )

        report = data_manager.generate_forecast(days=args.days, training_window=args.window)

        logger.info(f"{symbol} model accuracy over {report.training_points} points:\n"
                    f"{metrics_to_dataframe(report.recommendation)}")

        _, forecast = split_results(report.best_predictions)
        print(results_to_dataframe(forecast)[['date', 'predicted']].to_string(index=False))
        return 0

    except Exception as e:
        logger.error(f"Application error: {str(e)}", exc_info=True)
        return 1
    finally:
        data_manager.cleanup()


if __name__ == "__main__":
    sys.exit(main())
