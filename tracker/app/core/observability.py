"""
Logging setup for the Parcel Tracker.

All modules log through the "tracker" logger hierarchy and pass structured
fields via ``extra``.
"""

import logging
import sys

LOGGER_NAME = "tracker"

# Configure structured logger
logger = logging.getLogger(LOGGER_NAME)


def get_logger(name: str) -> logging.Logger:
    """Return a child of the tracker logger, e.g. ``tracker.store``."""
    return logger.getChild(name)


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a console handler to the tracker logger.
    
    Safe to call more than once; the handler is only added the first time.
    """
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(handler)
    return logger
