"""Logging setup."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level}</level> | "
    "{extra[component]} | {message}"
)

logger.configure(extra={"component": "reconkit"})


def configure_logging(level: str = "WARNING") -> None:
    """Replace loguru's default sink with a stderr sink at the given level."""
    level = str(level).upper() if level else "WARNING"
    if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
        level = "WARNING"
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        backtrace=False,
        diagnose=False,
        format=LOG_FORMAT,
    )


def get_logger(name: str = "reconkit"):
    return logger.bind(component=name)
