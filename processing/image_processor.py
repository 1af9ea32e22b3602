"""
Обработка изображений карточки: data URI, вписывание, PNG
"""
import base64
import binascii
import logging
import re
from io import BytesIO
from typing import Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from core.exceptions import ImageReadError

logger = logging.getLogger(__name__)

DATA_URI_RE = re.compile(r'^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$', re.DOTALL)


class ImageProcessor:
    @staticmethod
    def detect_mimetype(data: bytes) -> str:
        """Определить MIME тип по содержимому файла"""
        try:
            with Image.open(BytesIO(data)) as img:
                mimetype = img.get_format_mimetype()
                img.verify()
            # verify() не декодирует пиксели, обрезанный файл проходит проверку
            with Image.open(BytesIO(data)) as img:
                img.load()
        except (UnidentifiedImageError, OSError, SyntaxError, Image.DecompressionBombError) as e:
            raise ImageReadError(f"Файл не является изображением: {e}") from e
        if not mimetype:
            raise ImageReadError("Не удалось определить тип изображения")
        return mimetype

    @staticmethod
    def encode_data_uri(data: bytes) -> str:
        if not data:
            raise ImageReadError("Пустой файл")
        mimetype = ImageProcessor.detect_mimetype(data)
        return f"data:{mimetype};base64,{base64.b64encode(data).decode('ascii')}"

    @staticmethod
    def decode_data_uri(uri: str) -> bytes:
        match = DATA_URI_RE.match(uri or '')
        if not match:
            raise ImageReadError("Некорректный data URI")
        try:
            return base64.b64decode(match.group('data'), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageReadError(f"Ошибка декодирования base64: {e}") from e

    @staticmethod
    def open_data_uri(uri: str) -> Image.Image:
        data = ImageProcessor.decode_data_uri(uri)
        try:
            img = Image.open(BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
            raise ImageReadError(f"Изображение повреждено: {e}") from e
        return img.convert('RGBA')

    @staticmethod
    def fit_image(img: Image.Image, size: Tuple[int, int], cover: bool = False) -> Image.Image:
        """Вписать изображение в рамку.

        cover=True заполняет рамку целиком с обрезкой краев (как object-cover),
        иначе изображение вписывается целиком и центрируется на прозрачном фоне.
        """
        size = (max(1, size[0]), max(1, size[1]))
        if cover:
            return ImageOps.fit(img, size, Image.Resampling.LANCZOS)

        contained = ImageOps.contain(img, size, Image.Resampling.LANCZOS)
        canvas = Image.new('RGBA', size, (0, 0, 0, 0))
        offset = ((size[0] - contained.width) // 2, (size[1] - contained.height) // 2)
        canvas.paste(contained, offset, contained)
        return canvas

    @staticmethod
    def to_png_bytes(img: Image.Image, dpi: int = None) -> bytes:
        buffer = BytesIO()
        if dpi:
            img.save(buffer, format='PNG', dpi=(dpi, dpi))
        else:
            img.save(buffer, format='PNG')
        return buffer.getvalue()

    @staticmethod
    def png_data_uri(png: bytes) -> str:
        return f"data:image/png;base64,{base64.b64encode(png).decode('ascii')}"
