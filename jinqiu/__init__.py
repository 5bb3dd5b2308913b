"""Jinqiu - Classical Chinese poetry reading library"""

__version__ = "1.0.0"
__author__ = "Jinqiu Team"

from .config import Config, COLLECTIONS
from .models import PoemRecord
from .corpus import CategoryView, CorpusLoader, FileCache
from .search import ExternalSearch, filter_records
from .games import CoupletSession, FillBlankSession, compute_stats
from .card import CardCompositor, CardRenderState, ShareCardRenderer
from .services import ChatSession, CustomLibrary, PreviewNavigator

__all__ = [
    'Config',
    'COLLECTIONS',
    'PoemRecord',
    'CategoryView',
    'CorpusLoader',
    'FileCache',
    'ExternalSearch',
    'filter_records',
    'CoupletSession',
    'FillBlankSession',
    'compute_stats',
    'CardCompositor',
    'CardRenderState',
    'ShareCardRenderer',
    'ChatSession',
    'CustomLibrary',
    'PreviewNavigator',
]
