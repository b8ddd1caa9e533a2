import logging
import sys

from config import Config


def setup_logger(name: str) -> logging.Logger:
    """Setup a logger with consistent formatting"""

    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = logging.DEBUG if Config.DEBUG else logging.INFO
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


# Top-level packages whose module loggers (logging.getLogger(__name__)) carry engine events
APP_PACKAGES = ("api", "database", "games", "handicap", "matching", "scan", "services")


def setup_app_logging() -> None:
    """Attach the console handler to every engine package logger."""
    for package in APP_PACKAGES:
        setup_logger(package)
