# core/logging_config.py

import logging

from rich.logging import RichHandler

LOGGER_NAME = "travel_planner"

LOG_FORMAT = "%(name)s | %(funcName)s:%(lineno)d | %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the `travel_planner` logger tree once.
    Streamlit re-executes the script on every interaction, so calling this
    twice must not stack handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="[%X]"))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. get_logger("gemini") → travel_planner.gemini"""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
