"""Console logging for the gradient_wash package."""

import logging

_LOGGER_NAME = "gradient_wash"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single console handler to the package logger"""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger
