"""
PDFNinja - Logger Module

This module sets up logging for the application. Handlers and output format
belong to the entry point (the CLI calls ``logging.basicConfig``); records
from this logger propagate to the root logger.
"""

import logging

# Default values if config is not available
DEFAULT_LOGGER_NAME = "PDFNinja"


def setup_logger(
    logger_name: str | None = None,
    log_level: int | None = None,
) -> logging.Logger:
    """Set up and configure the application logger.

    Args:
        logger_name: Name for the logger (default: PDFNinja)
        log_level: Level to pin on the logger; None defers to the root logger

    Returns:
        A configured Logger instance
    """
    from pdfninja import config

    if logger_name is None:
        logger_name = getattr(config, "LOGGER_NAME", DEFAULT_LOGGER_NAME)

    logger = logging.getLogger(logger_name)
    if log_level is not None:
        logger.setLevel(log_level)
    return logger


# Create a singleton logger instance
logger = setup_logger()
