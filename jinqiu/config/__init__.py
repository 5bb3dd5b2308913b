"""Configuration module for Jinqiu."""

from .settings import Config
from .collections import (
    COLLECTIONS,
    CUSTOM_CATEGORY,
    HOME_SOURCES,
    SEARCH_SOURCES,
    CollectionSpec,
    HomeSource,
    SearchSource,
    category_for_poem_id,
    get_collection,
    get_collection_ids,
)
from .themes import CARD_THEMES, COLORS, FIGURE_IMAGES, FONT_COLORS, WALLPAPERS, CardTheme

__all__ = [
    'Config',
    'COLLECTIONS',
    'CUSTOM_CATEGORY',
    'HOME_SOURCES',
    'SEARCH_SOURCES',
    'CollectionSpec',
    'HomeSource',
    'SearchSource',
    'category_for_poem_id',
    'get_collection',
    'get_collection_ids',
    'CARD_THEMES',
    'COLORS',
    'FIGURE_IMAGES',
    'FONT_COLORS',
    'WALLPAPERS',
    'CardTheme',
]
