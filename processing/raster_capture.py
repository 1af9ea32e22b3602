"""
Растеризация раскладки карточки в PNG
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from PIL import Image, ImageDraw, ImageFont

from core.config import CAPTURE_SCALE
from core.exceptions import RasterCaptureError, SurfaceUnavailableError
from .card_renderer import CardLayout, CardSurface, ImageElement, RectElement, TextElement, GRAY_200, GRAY_500
from .image_processor import ImageProcessor

logger = logging.getLogger(__name__)

FONT_CANDIDATES = {
    (False, False): ('DejaVuSans.ttf', 'arial.ttf', 'Arial.ttf'),
    (True, False): ('DejaVuSans-Bold.ttf', 'arialbd.ttf', 'Arial Bold.ttf'),
    (False, True): ('DejaVuSans-Oblique.ttf', 'ariali.ttf', 'Arial Italic.ttf'),
    (True, True): ('DejaVuSans-BoldOblique.ttf', 'arialbi.ttf', 'Arial Bold Italic.ttf'),
}
ELLIPSIS = '…'
LINE_SPACING = 1.2


@lru_cache(maxsize=64)
def load_font(size: int, bold: bool = False, italic: bool = False):
    for name in FONT_CANDIDATES[(bold, italic)]:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def wrap_text(draw: ImageDraw.ImageDraw, text: str, font, width: int, max_lines: int) -> List[str]:
    """Перенос по словам в пределах ширины; лишнее обрезается многоточием"""
    lines: List[str] = []
    words = text.split()
    truncated = False

    while words:
        if len(lines) == max_lines:
            truncated = True
            break
        line = ''
        while words:
            candidate = f"{line} {words[0]}" if line else words[0]
            if draw.textlength(candidate, font=font) <= width:
                line = candidate
                words.pop(0)
            elif not line:
                # Слово длиннее строки - режем по символам
                head, tail = _split_word(draw, words[0], font, width)
                line = head
                words[0] = tail
                break
            else:
                break
        lines.append(line)

    if truncated and lines:
        lines[-1] = _ellipsize(draw, lines[-1], font, width)
    return lines


def _split_word(draw, word: str, font, width: int):
    cut = 1
    while cut < len(word) and draw.textlength(word[:cut + 1], font=font) <= width:
        cut += 1
    return word[:cut], word[cut:]


def _ellipsize(draw, line: str, font, width: int) -> str:
    while line and draw.textlength(line + ELLIPSIS, font=font) > width:
        line = line[:-1]
    return line.rstrip() + ELLIPSIS


def _gradient(size, colors, steps: int = 64) -> Image.Image:
    """Диагональный градиент по трем цветам"""
    small_w = steps
    small_h = max(2, round(steps * size[1] / size[0]))
    small = Image.new('RGB', (small_w, small_h))
    pixels = []
    for y in range(small_h):
        for x in range(small_w):
            t = (x / (small_w - 1) + y / (small_h - 1)) / 2
            if t < 0.5:
                start, end, k = colors[0], colors[1], t * 2
            else:
                start, end, k = colors[1], colors[2], (t - 0.5) * 2
            pixels.append(tuple(round(s + (e - s) * k) for s, e in zip(start, end)))
    small.putdata(pixels)
    return small.resize(size, Image.Resampling.BILINEAR).convert('RGBA')


class Rasterizer(ABC):
    @abstractmethod
    def capture(self, layout: CardLayout, scale: int) -> Image.Image:
        """Отрисовать раскладку в изображение, увеличенное в scale раз"""


class PillowRasterizer(Rasterizer):
    def capture(self, layout: CardLayout, scale: int) -> Image.Image:
        size = (layout.size.width * scale, layout.size.height * scale)
        card = _gradient(size, layout.background)

        draw = ImageDraw.Draw(card)
        for element in layout.elements:
            if isinstance(element, RectElement):
                self._draw_rect(draw, element, scale)
            elif isinstance(element, ImageElement):
                self._draw_image(card, draw, element, scale)
            elif isinstance(element, TextElement):
                self._draw_text(draw, element, scale)

        # Скругленные углы, фон за пределами карточки прозрачный
        mask = Image.new('L', size, 0)
        ImageDraw.Draw(mask).rounded_rectangle((0, 0, size[0] - 1, size[1] - 1),
                                               radius=layout.radius * scale, fill=255)
        card.putalpha(mask)
        return card

    @staticmethod
    def _scaled(box, scale):
        return (box.x * scale, box.y * scale, box.right * scale - 1, box.bottom * scale - 1)

    def _draw_rect(self, draw, element: RectElement, scale: int):
        draw.rounded_rectangle(
            self._scaled(element.box, scale),
            radius=element.radius * scale,
            fill=element.fill,
            outline=element.outline,
            width=element.outline_width * scale,
        )

    def _draw_image(self, card, draw, element: ImageElement, scale: int):
        box = element.box
        target = (box.width * scale, box.height * scale)

        if element.payload is None:
            if element.placeholder_label:
                self._draw_placeholder(draw, element, scale)
            return

        img = ImageProcessor.open_data_uri(element.payload)
        fitted = ImageProcessor.fit_image(img, target, cover=element.cover)
        if element.opacity < 1.0:
            alpha = fitted.getchannel('A').point(lambda a: int(a * element.opacity))
            fitted.putalpha(alpha)
        card.alpha_composite(fitted, (box.x * scale, box.y * scale))

    def _draw_placeholder(self, draw, element: ImageElement, scale: int):
        draw.rectangle(self._scaled(element.box, scale), fill=GRAY_200, outline=GRAY_500, width=scale)
        font = load_font(9 * scale)
        label = TextElement(element.box, element.placeholder_label, size=9,
                            color=GRAY_500, align='center')
        top = element.box.y * scale + (element.box.height * scale - 9 * scale) // 2
        self._draw_lines(draw, label, [label.text], font, scale, top)

    def _draw_text(self, draw, element: TextElement, scale: int):
        font = load_font(element.size * scale, element.bold, element.italic)
        lines = wrap_text(draw, element.display_text, font,
                          element.box.width * scale, element.max_lines)
        self._draw_lines(draw, element, lines, font, scale, element.box.y * scale)

    @staticmethod
    def _draw_lines(draw, element: TextElement, lines, font, scale: int, top: int):
        box = element.box
        line_height = round(element.size * scale * LINE_SPACING)
        y = top
        for line in lines:
            width = draw.textlength(line, font=font)
            if element.align == 'center':
                x = box.x * scale + (box.width * scale - width) / 2
            elif element.align == 'right':
                x = box.right * scale - width
            else:
                x = box.x * scale
            draw.text((x, y), line, font=font, fill=element.color)
            y += line_height


@dataclass
class CapturedImage:
    png: bytes
    width: int
    height: int

    @property
    def data_uri(self) -> str:
        return ImageProcessor.png_data_uri(self.png)


class RasterCapture:
    """Снимок текущей карточки. Снимки одной поверхности выполняются по очереди."""

    def __init__(self, rasterizer: Rasterizer = None, scale: int = CAPTURE_SCALE):
        self.rasterizer = rasterizer or PillowRasterizer()
        self.scale = scale

    async def capture(self, surface: CardSurface) -> CapturedImage:
        return await asyncio.to_thread(self.capture_sync, surface, self.scale)

    def capture_sync(self, surface: CardSurface, scale: int = None) -> CapturedImage:
        scale = scale or self.scale
        with surface.capture_lock:
            layout = surface.layout
            if layout is None:
                raise SurfaceUnavailableError("Карточка еще не отрисована")
            logger.info(f"Растеризация карточки {layout.size.width}x{layout.size.height} x{scale}")
            try:
                image = self.rasterizer.capture(layout, scale)
                png = ImageProcessor.to_png_bytes(image)
            except Exception as e:
                logger.error(f"Ошибка растеризации: {e}")
                raise RasterCaptureError(str(e)) from e
        return CapturedImage(png=png, width=image.width, height=image.height)

    def preview_png(self, surface: CardSurface, scale: int = 1) -> bytes:
        return self.capture_sync(surface, scale).png
