"""
Console logging setup for the QAP calculator
"""
import logging
from typing import Union

LOGGER_NAME = "qap_core"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Attach a single console handler to the package logger.

    Calling this again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(h, "_qap_console", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._qap_console = True
        logger.addHandler(handler)

    return logger
