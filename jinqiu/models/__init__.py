"""Data models for Jinqiu."""

from .poem import AUTHOR_PLACEHOLDER, TITLE_PLACEHOLDER, PoemRecord
from .puzzle import BLANK, Blank, CoupletQuestion, FillBlankQuestion
from .chat import ChatMessage

__all__ = [
    'AUTHOR_PLACEHOLDER',
    'TITLE_PLACEHOLDER',
    'PoemRecord',
    'BLANK',
    'Blank',
    'CoupletQuestion',
    'FillBlankQuestion',
    'ChatMessage',
]
