"""Logger setup shared by every module."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger.
    
    A single stream handler is attached to the package root logger the first
    time this is called, so child loggers never duplicate output.
    
    Args:
        name: Logger name (usually ``__name__``)
        level: Optional level name; defaults to ``JINQIU_LOG_LEVEL`` or INFO
        
    Returns:
        Logger instance
    """
    root = logging.getLogger(name.split(".")[0])
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
        root.setLevel(level or os.environ.get("JINQIU_LOG_LEVEL", "INFO").upper())
    
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level.upper())
    return logger
