"""Theme and decorative-figure selection for poem cards."""

from pathlib import Path
from typing import Optional

from ..config import CARD_THEMES, FIGURE_IMAGES, CardTheme, Config


def pick_theme(index: int) -> CardTheme:
    """Cycle through the card themes by list position."""
    return CARD_THEMES[index % len(CARD_THEMES)]


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def string_hash(text: str) -> int:
    """
    Browser-compatible ``h = c + (h << 5) - h`` string hash.

    Characters are consumed as UTF-16 code units and the shift wraps at
    32 bits, so a poem gets the same figure it gets in the web client.
    """
    data = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = unit + _to_int32(_to_int32(h) << 5) - h
    return h


def pick_figure(poem_id: str) -> str:
    """Deterministically choose a decorative figure for a poem id."""
    return FIGURE_IMAGES[abs(string_hash(poem_id)) % len(FIGURE_IMAGES)]


def figure_path(poem_id: str, figure_dir: Optional[str] = None) -> Path:
    return Path(figure_dir or Config.FIGURE_DIR) / pick_figure(poem_id)
