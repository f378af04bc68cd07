"""
JSON log lines for the hierarchy engine.

Every record carries asctime, name, levelname and message. Callers add context
through `extra=`; the engine uses owner, senior, junior and code on link
creation and rejection, index, failed_index and committed on bulk writes,
and error on store failures. Those keys become top-level JSON fields.
"""
import logging
import sys
from pythonjsonlogger import jsonlogger

from core.config import settings

def get_logger(name: str):
    """
    Configures and returns a logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers if the logger is already configured
    if logger.handlers:
        return logger

    logger.setLevel(settings.LOG_LEVEL.upper())

    handler = logging.StreamHandler(sys.stdout)

    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(name)s %(levelname)s %(message)s'
    )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger
