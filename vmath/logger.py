"""
Logger utility.
"""
import logging

from . import config


def get_logger(name=None, level=None):
    """Retrieve a configured logger."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(config.LOG_FORMAT)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(config.LOG_LEVEL if level is None else level)
    return logger
