"""Corpus module - normalize and load poem collections."""

from .normalizers import BaseNormalizer, NormalizerRegistry
from .cache import FileCache
from .sources import BaseSource, HttpSource, LocalSource, create_source
from .loader import CategoryPage, CategoryView, CorpusLoader, render_description

__all__ = [
    'BaseNormalizer',
    'NormalizerRegistry',
    'FileCache',
    'BaseSource',
    'HttpSource',
    'LocalSource',
    'create_source',
    'CategoryPage',
    'CategoryView',
    'CorpusLoader',
    'render_description',
]
