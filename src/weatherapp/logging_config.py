# console logging for the cli, library modules only create named loggers

from __future__ import annotations
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("weatherapp")
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logger.setLevel(numeric)

    # calling twice must not duplicate output
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    # connection pool chatter is noise at INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logger
