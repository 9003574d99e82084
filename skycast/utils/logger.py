import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from skycast.config import get_settings

settings = get_settings()

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Set up a logger that writes JSON lines to stdout.

    Extra fields passed through ``extra={...}`` end up as top-level keys
    of the JSON record, which is how request ids, cities and upstream
    status codes are attached to log lines.

    Args:
        name: The name of the logger (usually __name__)
        level: Optional level name overriding ``settings.log_level``

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            fmt=LOG_FORMAT,
            datefmt="%Y-%m-%dT%H:%M:%S%z",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    )

    logger.addHandler(handler)
    logger.propagate = False

    return logger
