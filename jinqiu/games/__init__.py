"""Games module - fill-blank, couplet and corpus statistics."""

from .fill_blank import FillBlankSession, SessionState
from .couplet import CoupletSession, load_couplets, parse_couplets
from .stats import STOP_WORDS, CorpusStats, FeiHuaLing, compute_stats

__all__ = [
    'FillBlankSession',
    'SessionState',
    'CoupletSession',
    'load_couplets',
    'parse_couplets',
    'STOP_WORDS',
    'CorpusStats',
    'FeiHuaLing',
    'compute_stats',
]
