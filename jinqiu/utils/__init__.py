"""Utils module."""

from .logger import setup_logger
from .text import HanText, split_content

__all__ = [
    'setup_logger',
    'HanText',
    'split_content',
]
