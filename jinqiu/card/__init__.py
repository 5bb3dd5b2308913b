"""Card module - poem cards, share cards and theme selection."""

from .selection import figure_path, pick_figure, pick_theme, string_hash
from .compositor import (
    DEFAULT_TEXT,
    CardCompositor,
    CardRenderError,
    CardRenderState,
    DragController,
    ShadowSpec,
    layout_text,
    text_for_poem,
)
from .share import ShareCardRenderer

__all__ = [
    'figure_path',
    'pick_figure',
    'pick_theme',
    'string_hash',
    'DEFAULT_TEXT',
    'CardCompositor',
    'CardRenderError',
    'CardRenderState',
    'DragController',
    'ShadowSpec',
    'layout_text',
    'text_for_poem',
    'ShareCardRenderer',
]
