"""Search module - text matching and multi-file external search."""

from .matcher import filter_records, matches, matches_any, raw_matches_any
from .variants import script_variants, to_simplified, to_traditional
from .external import ExternalSearch

__all__ = [
    'filter_records',
    'matches',
    'matches_any',
    'raw_matches_any',
    'script_variants',
    'to_simplified',
    'to_traditional',
    'ExternalSearch',
]
