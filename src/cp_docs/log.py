import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Replace loguru's default sink with a compact stderr sink (and optionally a file)."""
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    if log_file:
        logger.add(log_file, level="DEBUG", format=LOG_FORMAT, colorize=False)
