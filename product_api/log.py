"""
Logging setup for the product service.

Usage:
    from product_api.log import get_logger
    logger = get_logger(__name__)

All loggers live under the "product_api" hierarchy.
"""

import logging
import sys

_LOGGER_NAME = "product_api"


def get_logger(name: str = None) -> logging.Logger:
    """Return a child logger under the product_api hierarchy."""
    if name is None or name == _LOGGER_NAME:
        return logging.getLogger(_LOGGER_NAME)
    # "product_api.service" -> "product_api.service"
    short = name.rsplit(".", 1)[-1]
    return logging.getLogger(f"{_LOGGER_NAME}.{short}")


def configure_logging(level: str = "INFO") -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(_LOGGER_NAME)
    root_logger.setLevel(numeric_level)

    # called again by every create_app()
    if root_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] %(levelname)-5s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    ))
    root_logger.addHandler(handler)
    root_logger.propagate = False
