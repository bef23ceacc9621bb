"""Centralized logging configuration.

Library modules use ``logging.getLogger(__name__)`` and never attach
handlers themselves. Entry points call ``get_logger`` or
``configure_logging`` once to get console output.
"""

import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
PACKAGE_LOGGER = "copilotrm"


def _ensure_handler(logger: logging.Logger) -> None:
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)


def get_logger(name: str, level: str = "INFO") -> logging.Logger:
    """Get a configured logger instance."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level))
    _ensure_handler(logger)
    return logger


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach console output to the package logger.
    
    Args:
        level: Log level name. Taken from the global config if not provided.
        
    Returns:
        The package-level logger
    """
    if level is None:
        from copilotrm.common.config import get_config
        level = get_config().log_level.value
    return get_logger(PACKAGE_LOGGER, level)
