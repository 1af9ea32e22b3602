"""
Генератор PDF с карточкой
"""
import logging
from abc import ABC, abstractmethod
from io import BytesIO
from typing import Tuple

from reportlab.pdfgen import canvas
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader

from .exceptions import PDFGenerationError

logger = logging.getLogger(__name__)


class PdfBuilder(ABC):
    @abstractmethod
    def embed(self, png: bytes, page_size_mm: Tuple[float, float]) -> bytes:
        """Одностраничный PDF с изображением на весь лист"""


class PDFGenerator(PdfBuilder):
    def __init__(self, title: str = 'Kartu Pelajar'):
        self.title = title

    def embed(self, png: bytes, page_size_mm: Tuple[float, float]) -> bytes:
        width_mm, height_mm = page_size_mm
        # Альбомная ориентация: длинная сторона горизонтально
        page_width = max(width_mm, height_mm) * mm
        page_height = min(width_mm, height_mm) * mm
        logger.info(f"Создание PDF {page_width / mm:.2f}x{page_height / mm:.2f} мм")

        try:
            buffer = BytesIO()
            c = canvas.Canvas(buffer, pagesize=(page_width, page_height))
            c.setTitle(self.title)
            c.drawImage(ImageReader(BytesIO(png)), 0, 0, width=page_width, height=page_height,
                        mask='auto')
            c.showPage()
            c.save()
        except Exception as e:
            logger.error(f"Ошибка при создании PDF: {e}")
            raise PDFGenerationError(str(e)) from e

        return buffer.getvalue()
