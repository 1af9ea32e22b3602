"""
Генератор документа Word с карточкой
"""
import logging
from abc import ABC, abstractmethod
from io import BytesIO

from docx import Document
from docx.shared import Emu

from .exceptions import DocumentGenerationError
from .models import PixelSize

logger = logging.getLogger(__name__)

# 96 dpi: 914400 EMU на дюйм / 96
EMU_PER_PIXEL = 9525


class DocumentBuilder(ABC):
    @abstractmethod
    def embed(self, png: bytes, size: PixelSize) -> bytes:
        """Документ из одного абзаца с одним изображением"""


class DocxGenerator(DocumentBuilder):
    def embed(self, png: bytes, size: PixelSize) -> bytes:
        logger.info(f"Создание документа Word, изображение {size.width}x{size.height} px")
        try:
            document = Document()
            paragraph = document.add_paragraph()
            paragraph.add_run().add_picture(
                BytesIO(png),
                width=Emu(size.width * EMU_PER_PIXEL),
                height=Emu(size.height * EMU_PER_PIXEL),
            )
            buffer = BytesIO()
            document.save(buffer)
        except Exception as e:
            logger.error(f"Ошибка при создании документа Word: {e}")
            raise DocumentGenerationError(str(e)) from e

        return buffer.getvalue()
