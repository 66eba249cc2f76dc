"""
Application logging: one 'PriceForecaster' logger writing to the console and a daily file
"""

import logging
import os
from datetime import date
from typing import Optional

LOGGER_NAME = 'PriceForecaster'
CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_configured = False


def get_home_dir() -> str:
    """Base directory for logs and settings"""
    return os.environ.get('PRICE_FORECASTER_HOME', 'output')


def get_log_file(day: Optional[date] = None) -> str:
    """Path of the log file for the given day (today by default)"""
    day = day or date.today()
    return os.path.join(get_home_dir(), 'logs', f'price_forecaster_{day:%Y%m%d}.log')


def setup_logging(console_level: int = logging.INFO) -> logging.Logger:
    """
    Attach console and file handlers to the application logger

    Safe to call repeatedly: handlers are only attached on the first call,
    later calls just adjust the console level.
    """
    global _configured
    root = logging.getLogger(LOGGER_NAME)

    if _configured:
        for handler in root.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(console_level)
        return root

    root.setLevel(logging.DEBUG)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    log_file = get_log_file()
    os.makedirs(os.path.dirname(log_file), exist_ok=True)
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    root.addHandler(file_handler)

    _configured = True
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the application logger, or a named child of it"""
    root = setup_logging() if not _configured else logging.getLogger(LOGGER_NAME)
    return root.getChild(name) if name else root
