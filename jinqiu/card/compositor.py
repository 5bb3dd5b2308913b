"""
Card Compositor - draw poem text onto a background image.

The whole image is recomputed from a CardRenderState on every render;
nothing is patched incrementally. Text can run in vertical columns
(right to left, the first line rightmost) or centered horizontal lines,
with an optional blurred drop shadow.
"""

import base64
import binascii
import io
import math
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from ..config import COLORS, WALLPAPERS, Config
from ..models import PoemRecord
from ..utils import setup_logger

logger = setup_logger(__name__)

DEFAULT_TEXT = "在此输入诗词..."
DEFAULT_CANVAS = (1080, 1440)

# Regular/bold CJK faces, macOS then Linux then Windows
FONT_CANDIDATES = [
    "/System/Library/Fonts/STHeiti Medium.ttc",
    "/System/Library/Fonts/Supplemental/Songti.ttc",
    "/System/Library/Fonts/PingFang.ttc",
    "/usr/share/fonts/opentype/noto/NotoSerifCJK-Bold.ttc",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Bold.ttc",
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/wqy/wqy-zenhei.ttc",
    "C:/Windows/Fonts/simkai.ttf",
    "C:/Windows/Fonts/msyh.ttc",
]

Background = Union[str, bytes, None]
Placement = Tuple[str, Tuple[float, float], str]


class CardRenderError(Exception):
    """Raised when a card image cannot be produced."""
    pass


@dataclass
class ShadowSpec:
    """Drop shadow given as color, opacity, blur radius and angle/distance."""
    color: str = "#000000"
    opacity: float = 0.5
    blur: float = 4
    angle: float = 45  # degrees, clockwise from +x
    distance: float = 4

    def offset(self) -> Tuple[float, float]:
        rad = math.radians(self.angle)
        return (self.distance * math.cos(rad), self.distance * math.sin(rad))

    def rgba(self) -> Tuple[int, int, int, int]:
        r, g, b = ImageColor.getrgb(self.color)[:3]
        return (r, g, b, round(max(0.0, min(1.0, self.opacity)) * 255))


@dataclass
class CardRenderState:
    """
    Everything a render depends on.

    ``x`` and ``y`` anchor the text as fractions of the canvas size.
    ``background`` is a wallpaper file name or path, a ``data:`` URI of an
    uploaded image, raw image bytes, or None for plain paper.
    """
    background: Background = field(default_factory=lambda: WALLPAPERS[0])
    text: str = DEFAULT_TEXT
    font_size: int = 48
    color: str = "#333333"
    vertical: bool = True
    x: float = 0.5
    y: float = 0.3
    shadow: Optional[ShadowSpec] = None


def text_for_poem(poem: PoemRecord) -> str:
    """Prefill text for a selected poem: title, author, blank line, lines."""
    return f"{poem.title}\n{poem.author}\n\n" + "\n".join(poem.content)


class DragController:
    """
    Move the text anchor with a pointer.

    States are idle and dragging. Pointer positions are given in display
    coordinates and scaled by the canvas/display ratio before the delta is
    applied as a fraction of the canvas size.

    Usage:
        drag = DragController(state, canvas_size=(1080, 1440), display_size=(540, 720))
        drag.pointer_down(100, 100)
        drag.pointer_move(110, 100)   # state.x += 20 / 1080
        drag.pointer_up()
    """

    def __init__(
        self,
        state: CardRenderState,
        canvas_size: Tuple[int, int],
        display_size: Optional[Tuple[float, float]] = None,
        display_origin: Tuple[float, float] = (0, 0)
    ):
        self.state = state
        self.canvas_size = canvas_size
        self.display_size = display_size or canvas_size
        self.display_origin = display_origin
        self.dragging = False
        self._last: Tuple[float, float] = (0.0, 0.0)

    def to_canvas(self, x: float, y: float) -> Tuple[float, float]:
        """Convert a display-space pointer position into canvas pixels."""
        scale_x = self.canvas_size[0] / self.display_size[0]
        scale_y = self.canvas_size[1] / self.display_size[1]
        return ((x - self.display_origin[0]) * scale_x, (y - self.display_origin[1]) * scale_y)

    def pointer_down(self, x: float, y: float) -> None:
        self.dragging = True
        self._last = self.to_canvas(x, y)

    def pointer_move(self, x: float, y: float) -> bool:
        """
        Translate the anchor by the pointer delta.

        Returns:
            True when the state changed and the card needs a re-render
        """
        if not self.dragging:
            return False
        cx, cy = self.to_canvas(x, y)
        self.state.x += (cx - self._last[0]) / self.canvas_size[0]
        self.state.y += (cy - self._last[1]) / self.canvas_size[1]
        self._last = (cx, cy)
        return True

    def pointer_up(self) -> None:
        """End the drag (pointer released or left the canvas)."""
        self.dragging = False


def layout_text(
    text: str,
    font_size: int,
    anchor: Tuple[float, float],
    vertical: bool
) -> List[Placement]:
    """
    Compute where every piece of text is drawn.

    Vertical text gets one column per input line with a pitch of
    ``font_size * 2.5``; the columns are centered on the anchor and the
    first line ends up rightmost. Horizontal text centers each line on the
    anchor with a pitch of ``font_size * 3``.

    Returns:
        (text, (x, y), pillow_anchor) tuples in drawing order
    """
    x, y = anchor
    lines = text.split("\n")
    placements: List[Placement] = []

    if vertical:
        pitch = font_size * 2.5
        # Rightmost column first, read right to left
        column_x = x + len(lines) * pitch / 2 - pitch / 2
        for line in lines:
            char_y = y
            for ch in line:
                placements.append((ch, (column_x, char_y), "la"))
                char_y += pitch
            column_x -= pitch
    else:
        for i, line in enumerate(lines):
            placements.append((line, (x, y + i * font_size * 3), "ma"))

    return placements


class CardCompositor:
    """
    Render CardRenderStates with Pillow.

    Usage:
        compositor = CardCompositor()
        png = compositor.export_png(CardRenderState(text="床前明月光"))
    """

    def __init__(
        self,
        font_path: Optional[str] = None,
        wallpaper_dir: Optional[str] = None
    ):
        self.font_path = font_path or Config.FONT_PATH
        self.wallpaper_dir = Path(wallpaper_dir or Config.WALLPAPER_DIR)
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def get_font(self, size: int):
        """Load the text face at a pixel size, falling back to Pillow's default."""
        if size in self._fonts:
            return self._fonts[size]

        candidates = ([self.font_path] if self.font_path else []) + FONT_CANDIDATES
        font = None
        for path in candidates:
            try:
                font = ImageFont.truetype(path, size)
                break
            except OSError:
                continue
        if font is None:
            logger.debug("No CJK font found, using Pillow default")
            font = ImageFont.load_default(size)

        self._fonts[size] = font
        return font

    def load_background(self, background: Background) -> Image.Image:
        """
        Open a background as an RGBA image.

        Raises:
            CardRenderError: If the image cannot be read or decoded
        """
        if background is None:
            return Image.new("RGBA", DEFAULT_CANVAS, COLORS["paper"])

        try:
            if isinstance(background, bytes):
                data = background
            elif background.startswith("data:"):
                data = base64.b64decode(background.split(",", 1)[1])
            else:
                path = Path(background)
                if not path.is_absolute():
                    path = self.wallpaper_dir / path
                data = path.read_bytes()
            with Image.open(io.BytesIO(data)) as image:
                return image.convert("RGBA")
        except (OSError, IndexError, ValueError, binascii.Error) as e:
            raise CardRenderError(f"Failed to load background: {e}") from e

    def _draw_layer(
        self,
        size: Tuple[int, int],
        placements: Sequence[Placement],
        font,
        fill: Tuple[int, int, int, int],
        offset: Tuple[float, float] = (0, 0)
    ) -> Image.Image:
        layer = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        # Thin stroke in the fill color stands in for a bold face
        stroke = max(1, font.size // 40) if hasattr(font, "size") else 0
        for text, (x, y), anchor in placements:
            draw.text(
                (x + offset[0], y + offset[1]),
                text,
                font=font,
                fill=fill,
                anchor=anchor,
                stroke_width=stroke,
                stroke_fill=fill,
            )
        return layer

    def render(self, state: CardRenderState) -> Image.Image:
        """
        Draw the full card for a state.

        Returns:
            RGBA image the size of the background

        Raises:
            CardRenderError: If the background or text cannot be drawn
        """
        image = self.load_background(state.background)
        width, height = image.size
        placements = layout_text(
            state.text, state.font_size, (width * state.x, height * state.y), state.vertical
        )

        try:
            font = self.get_font(state.font_size * 2)
            fill = ImageColor.getrgb(state.color)
            fill = (fill[0], fill[1], fill[2], 255)

            if state.shadow is not None:
                shadow = self._draw_layer(
                    image.size, placements, font, state.shadow.rgba(), state.shadow.offset()
                )
                if state.shadow.blur > 0:
                    # Canvas blur is roughly twice the Gaussian radius
                    shadow = shadow.filter(ImageFilter.GaussianBlur(state.shadow.blur / 2))
                image = Image.alpha_composite(image, shadow)

            text_layer = self._draw_layer(image.size, placements, font, fill)
            return Image.alpha_composite(image, text_layer)
        except ValueError as e:
            raise CardRenderError(f"Failed to draw text: {e}") from e

    def export_png(self, state: CardRenderState) -> bytes:
        """Serialize the rendered card as PNG bytes."""
        buffer = io.BytesIO()
        self.render(state).save(buffer, format="PNG")
        return buffer.getvalue()

    def save_png(
        self,
        state: CardRenderState,
        directory: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> Path:
        """
        Write the card as ``painting-realm-{timestamp}.png``.

        Args:
            state: Card to render
            directory: Output directory (defaults to Config.EXPORT_DIR)
            timestamp: Milliseconds since the epoch (defaults to now)

        Returns:
            Path of the written file
        """
        output_dir = Path(directory or Config.EXPORT_DIR)
        output_dir.mkdir(parents=True, exist_ok=True)
        if timestamp is None:
            timestamp = int(time.time() * 1000)

        path = output_dir / f"painting-realm-{timestamp}.png"
        data = self.export_png(state)
        try:
            path.write_bytes(data)
        except OSError as e:
            raise CardRenderError(f"Failed to write {path}: {e}") from e

        logger.info("Saved card: %s", path)
        return path
