"""
Перенос пользовательского ввода в хранилище карточки
"""
import asyncio
import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

import aiofiles

from .card_store import CardStore
from .exceptions import ImageReadError, UnknownFieldError
from .models import CardRecord, IMAGE_FIELDS, TEXT_FIELDS

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, BinaryIO, None]


class InputCapture:
    def __init__(self, store: CardStore):
        self.store = store

    def apply_text(self, key: str, value: str) -> CardRecord:
        """Текстовое поле применяется как есть, без преобразований"""
        if key not in TEXT_FIELDS:
            raise UnknownFieldError(key)
        return self.store.update(key, value)

    async def apply_image(self, key: str, source: ImageSource) -> Optional[CardRecord]:
        """Прочитать файл, закодировать в data URI и записать в поле key.

        Если файл не выбран (source is None), поле не меняется. Нечитаемый файл
        тоже не меняет поле: ошибка только логируется.
        """
        if key not in IMAGE_FIELDS:
            raise UnknownFieldError(key)
        if source is None:
            logger.debug(f"Файл не выбран для {key}, поле не изменено")
            return None

        try:
            data = await self._read(source)
            payload = await asyncio.to_thread(_encode, data)
        except (OSError, ImageReadError) as e:
            logger.warning(f"Не удалось прочитать изображение для {key}: {e}")
            return None

        logger.info(f"Изображение загружено в {key} ({len(data)} байт)")
        return self.store.update(key, payload)

    @staticmethod
    async def _read(source) -> bytes:
        if isinstance(source, (str, Path)):
            async with aiofiles.open(source, 'rb') as f:
                return await f.read()
        return await asyncio.to_thread(source.read)


def _encode(data: bytes) -> str:
    from processing.image_processor import ImageProcessor
    return ImageProcessor.encode_data_uri(data)
