"""Themed share card: a poem laid out on its card theme for saving as PNG."""

import io
from pathlib import Path
from typing import Optional

from PIL import Image, ImageColor, ImageDraw

from ..config import Config
from ..models import PoemRecord
from ..utils import setup_logger
from .compositor import CardCompositor, CardRenderError
from .selection import figure_path, pick_theme

logger = setup_logger(__name__)

SHARE_WIDTH = 600
SHARE_SCALE = 2
BRAND = "锦秋诗词"
BRAND_LATIN = "Jinqiu Poetry"
FOOTER = "长按识别二维码 · 品读更多诗词"
SHARE_ERROR = "生成图片失败，请重试"


def _gradient(size, top: str, bottom: str) -> Image.Image:
    """Vertical two-color gradient."""
    width, height = size
    start = ImageColor.getrgb(top)
    end = ImageColor.getrgb(bottom)
    column = Image.new("RGBA", (1, height))
    for y in range(height):
        t = y / max(1, height - 1)
        column.putpixel((0, y), tuple(round(a + (b - a) * t) for a, b in zip(start, end)) + (255,))
    return column.resize((width, height))


class ShareCardRenderer:
    """
    Render a poem as a shareable card image.

    The theme is chosen by list position and the decorative figure by a
    hash of the poem id, so the same poem always looks the same.

    Usage:
        renderer = ShareCardRenderer()
        path = renderer.save(poem, index=3)
    """

    def __init__(
        self,
        compositor: Optional[CardCompositor] = None,
        figure_dir: Optional[str] = None,
        width: int = SHARE_WIDTH,
        scale: int = SHARE_SCALE
    ):
        self.compositor = compositor or CardCompositor()
        self.figure_dir = figure_dir or Config.FIGURE_DIR
        self.width = width
        self.scale = scale

    @staticmethod
    def file_name(poem: PoemRecord) -> str:
        return f"{BRAND}-{poem.title}.png"

    def _paste_figure(self, card: Image.Image, poem: PoemRecord) -> None:
        path = figure_path(poem.id, self.figure_dir)
        try:
            with Image.open(path) as figure:
                figure = figure.convert("RGBA")
        except OSError:
            logger.debug("Figure unavailable: %s", path)
            return

        side = 192 * self.scale
        figure.thumbnail((side, side))
        # 30% opacity
        alpha = figure.getchannel("A").point(lambda a: a * 3 // 10)
        figure.putalpha(alpha)
        overlay = Image.new("RGBA", card.size, (0, 0, 0, 0))
        # Tucked past the bottom-right corner
        offset = 20 * self.scale
        overlay.paste(figure, (card.width - figure.width + offset, card.height - figure.height + offset))
        card.alpha_composite(overlay)

    def render(self, poem: PoemRecord, index: int = 0) -> Image.Image:
        """
        Lay out one poem on its theme.

        Args:
            poem: Poem to draw
            index: Position in the list it was shown in (selects the theme)

        Returns:
            RGBA image ``width * scale`` pixels wide
        """
        theme = pick_theme(index)
        s = self.scale
        pad = 48 * s
        line_pitch = 48 * s

        brand_font = self.compositor.get_font(24 * s)
        latin_font = self.compositor.get_font(12 * s)
        title_font = self.compositor.get_font(36 * s)
        meta_font = self.compositor.get_font(18 * s)
        body_font = self.compositor.get_font(24 * s)
        footer_font = self.compositor.get_font(12 * s)

        header_height = 88 * s
        title_height = 56 * s
        meta_height = 48 * s
        footer_height = 72 * s
        width = self.width * s
        height = (pad * 2 + header_height + title_height + meta_height
                  + line_pitch * len(poem.content) + footer_height)

        card = _gradient((width, height), theme.bg_from, theme.bg_to)
        self._paste_figure(card, poem)

        draw = ImageDraw.Draw(card)
        draw.rectangle((0, 0, width - 1, height - 1), outline=theme.border, width=8 * s)

        center = width / 2
        y = pad
        draw.text((pad, y), BRAND, font=brand_font, fill="#292524")
        draw.text((pad, y + 32 * s), BRAND_LATIN, font=latin_font, fill="#78716c")
        y += header_height

        draw.text((center, y), poem.title, font=title_font, fill=theme.title, anchor="ma")
        y += title_height
        draw.text((center, y), f"{poem.dynasty} · {poem.author}", font=meta_font, fill=theme.text, anchor="ma")
        y += meta_height

        for line in poem.content:
            draw.text((center, y), line, font=body_font, fill=theme.text, anchor="ma")
            y += line_pitch

        y += 24 * s
        draw.line((pad, y, width - pad, y), fill=theme.border, width=s)
        draw.text((center, y + 16 * s), FOOTER, font=footer_font, fill=theme.text, anchor="ma")
        return card

    def export_png(self, poem: PoemRecord, index: int = 0) -> bytes:
        """
        Render the share card as PNG bytes.

        Raises:
            CardRenderError: With the user-facing retry message on failure
        """
        try:
            buffer = io.BytesIO()
            self.render(poem, index).save(buffer, format="PNG")
            return buffer.getvalue()
        except (OSError, ValueError) as e:
            logger.error("Share card failed for %s: %s", poem.id, e)
            raise CardRenderError(SHARE_ERROR) from e

    def save(self, poem: PoemRecord, index: int = 0, directory: Optional[str] = None) -> Path:
        """Write the share card as ``锦秋诗词-{title}.png``."""
        output_dir = Path(directory or Config.EXPORT_DIR)
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / self.file_name(poem)
        data = self.export_png(poem, index)
        try:
            path.write_bytes(data)
        except OSError as e:
            logger.error("Share card failed for %s: %s", poem.id, e)
            raise CardRenderError(SHARE_ERROR) from e
        return path
