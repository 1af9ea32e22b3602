"""
Раскладка карточки учащегося.

render_card() - чистая функция: по записи CardRecord строит набор
позиционированных элементов в пикселях предпросмотра (масштаб 1). Пустые
поля заменяются заглушками из core.config.PLACEHOLDERS, поэтому карточка
всегда выглядит заполненной. Растеризация элементов - в raster_capture.
"""
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Optional, Tuple

from core.config import (
    CardConfig, PLACEHOLDERS, IMAGE_PLACEHOLDERS, LABELS, PREVIEW_SIZES
)
from core.models import CardRecord, CardVariant, PixelSize

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

# Палитра карточки
BLUE_900 = (30, 58, 138)
BLUE_800 = (30, 64, 175)
BLUE_200 = (191, 219, 254)
BLUE_100 = (219, 234, 254)
CYAN_100 = (207, 250, 254)
GRAY_200 = (229, 231, 235)
GRAY_500 = (107, 114, 128)
GRAY_700 = (55, 65, 81)
WHITE = (255, 255, 255)

BACKGROUND = (BLUE_100, WHITE, CYAN_100)
CORNER_RADIUS = 16
WATERMARK_OPACITY = 0.12


@dataclass(frozen=True)
class Box:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height


@dataclass(frozen=True)
class RectElement:
    box: Box
    fill: Optional[Color] = None
    outline: Optional[Color] = None
    outline_width: int = 0
    radius: int = 0


@dataclass(frozen=True)
class TextElement:
    box: Box
    text: str
    key: Optional[str] = None
    prefix: str = ''
    size: int = 12
    color: Color = GRAY_700
    bold: bool = False
    italic: bool = False
    align: str = 'left'
    max_lines: int = 1
    placeholder: bool = False

    @property
    def display_text(self) -> str:
        return f"{self.prefix}{self.text}"


@dataclass(frozen=True)
class ImageElement:
    box: Box
    key: str
    payload: Optional[str]
    cover: bool = False
    opacity: float = 1.0
    placeholder_label: Optional[str] = None

    @property
    def placeholder(self) -> bool:
        return self.payload is None


@dataclass(frozen=True)
class CardLayout:
    variant: CardVariant
    size: PixelSize
    elements: tuple
    background: Tuple[Color, Color, Color] = BACKGROUND
    radius: int = CORNER_RADIUS

    def find(self, key: str):
        """Все элементы, отображающие поле key"""
        return [e for e in self.elements if getattr(e, 'key', None) == key]

    def text_for(self, key: str) -> Optional[str]:
        for element in self.find(key):
            if isinstance(element, TextElement):
                return element.text
        return None


def _field(record: CardRecord, key: str) -> Tuple[str, bool]:
    value = record.get(key)
    if value:
        return value, False
    return PLACEHOLDERS[key], True


def _text(record: CardRecord, key: str, box: Box, **kwargs) -> TextElement:
    text, placeholder = _field(record, key)
    return TextElement(box=box, text=text, key=key, placeholder=placeholder, **kwargs)


def _image(record: CardRecord, key: str, box: Box, **kwargs) -> ImageElement:
    return ImageElement(
        box=box, key=key, payload=record.get(key),
        placeholder_label=IMAGE_PLACEHOLDERS.get(key), **kwargs
    )


def _header(record: CardRecord, width: int) -> list:
    return [
        RectElement(Box(12, 12, width - 24, 64), fill=BLUE_800, radius=8),
        RectElement(Box(24, 20, 48, 48), fill=WHITE, radius=6),
        _image(record, 'school_logo', Box(28, 24, 40, 40)),
        TextElement(Box(84, 18, width - 108, 14), LABELS['title'].upper(),
                    size=11, color=BLUE_200, bold=True),
        _text(record, 'school_name', Box(84, 33, width - 108, 20),
              size=16, color=WHITE, bold=True),
        _text(record, 'school_address', Box(84, 54, width - 108, 14),
              size=10, color=BLUE_200),
    ]


def _photo(record: CardRecord) -> list:
    return [
        RectElement(Box(24, 92, 128, 160), fill=GRAY_200, outline=BLUE_200,
                    outline_width=4, radius=8),
        _image(record, 'student_photo', Box(28, 96, 120, 152), cover=True),
    ]


def _details(record: CardRecord, width: int) -> list:
    column_x = 168
    value_x = column_x + 56
    value_width = width - 16 - value_x
    elements = [
        _text(record, 'student_name', Box(column_x, 94, width - 16 - column_x, 28),
              size=20, color=BLUE_900, bold=True),
    ]
    for row, key in enumerate(('nisn', 'student_class', 'address')):
        y = 128 + row * 18
        elements.append(TextElement(Box(column_x, y, 48, 16), LABELS[key],
                                    size=12, color=GRAY_500, bold=True))
        elements.append(_text(record, key, Box(value_x - 8, y, value_width + 8, 16),
                              prefix=': ', size=12))
    return elements


def _signature(record: CardRecord, width: int, top: int, with_issuance: bool) -> list:
    x = width - 16 - 192
    elements = []
    if with_issuance:
        # «<место>, <день> <месяц> <год>»
        elements.extend([
            _text(record, 'issue_place', Box(x, top, 84, 13), size=10),
            TextElement(Box(x + 84, top, 8, 13), ',', size=10),
            _text(record, 'issue_day', Box(x + 92, top, 20, 13), size=10),
            _text(record, 'issue_month', Box(x + 112, top, 46, 13), size=10),
            _text(record, 'issue_year', Box(x + 158, top, 34, 13), size=10),
        ])
        top += 13
    elements.extend([
        TextElement(Box(x, top, 192, 13), LABELS['acknowledged'], size=10, align='center'),
        TextElement(Box(x, top + 13, 192, 13), LABELS['principal'], size=10, align='center'),
        _text(record, 'principal_name', Box(x, top + 49, 192, 15),
              size=10, bold=True, align='center'),
        RectElement(Box(x, top + 65, 192, 1), fill=GRAY_700),
        _text(record, 'principal_nip', Box(x, top + 68, 192, 13),
              prefix=f"{LABELS['nip']} ", size=10, align='center'),
    ])
    return elements


def _notes(record: CardRecord, width: int, height: int) -> list:
    return [
        _text(record, 'notes', Box(24, height - 31, width - 48, 24),
              prefix=f"{LABELS['notes']} ", size=9, color=GRAY_500,
              italic=True, max_lines=2),
    ]


def render_card(record: CardRecord, variant: CardVariant = CardVariant.STANDARD) -> CardLayout:
    """Построить раскладку карточки. Одинаковая запись - одинаковая раскладка."""
    size = PREVIEW_SIZES[variant]
    extended = variant == CardVariant.EXTENDED
    bottom_top = size.height - 135

    elements = []
    if extended and record.watermark:
        elements.append(ImageElement(
            Box(size.width // 2 - 80, size.height // 2 - 80, 160, 160),
            key='watermark', payload=record.watermark, opacity=WATERMARK_OPACITY
        ))
    elements.extend(_header(record, size.width))
    elements.extend(_photo(record))
    elements.extend(_details(record, size.width))
    elements.append(_image(record, 'qr_code', Box(168, bottom_top, 96, 96)))
    elements.extend(_signature(record, size.width, bottom_top, extended))
    elements.extend(_notes(record, size.width, size.height))

    return CardLayout(variant=variant, size=size, elements=tuple(elements))


class CardSurface:
    """Отрисованная карточка, которая перестраивается при каждом изменении записи"""

    def __init__(self, config: CardConfig = None):
        self.config = config or CardConfig()
        self.layout: Optional[CardLayout] = None
        self.capture_lock = Lock()
        self._record: Optional[CardRecord] = None
        self._store = None

    def attach(self, store):
        self._store = store
        store.subscribe(self.render)
        self.render(store.record)

    def render(self, record: CardRecord) -> CardLayout:
        self._record = record
        self.layout = render_card(record, self.config.variant)
        return self.layout

    def set_variant(self, variant: CardVariant):
        self.config.variant = variant
        logger.info(f"Вариант карточки: {variant.value}")
        if self._store is not None:
            self._store.refresh()
        elif self._record is not None:
            self.render(self._record)
