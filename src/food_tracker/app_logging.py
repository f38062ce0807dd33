"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Route ``food_tracker`` loggers to one stream handler at ``level``.

    Repeated calls only change the level; level names are case-insensitive.
    """
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger("food_tracker")
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
