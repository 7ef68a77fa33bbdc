"""Default logger used when no logger is injected into a strategy."""

import logging

DEFAULT_LOGGER_NAME = "vstorage"


def get_default_logger() -> logging.Logger:
    return logging.getLogger(DEFAULT_LOGGER_NAME)
