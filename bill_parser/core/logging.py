"""
Loguru setup shared by the API and the CLI.
"""
import sys
from loguru import logger
from .config import settings

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level> | {extra}"
)


def setup_logging(level: str | None = None):
    """Replace loguru's default sink with one honoring LOG_LEVEL and return the logger."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.log_level).upper(),
        format=_LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
    return logger
