# tests/test_raster_capture.py
import unittest
import sys
import os
from io import BytesIO
from PIL import Image, ImageDraw

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from core.card_store import CardStore
from core.config import CardConfig, CAPTURE_SCALE
from core.exceptions import RasterCaptureError, SurfaceUnavailableError
from core.models import CardVariant
from processing.card_renderer import CardSurface
from processing.image_processor import ImageProcessor
from processing.raster_capture import RasterCapture, Rasterizer, load_font, wrap_text


def png_data_uri(color='red', size=(40, 50)):
    buffer = BytesIO()
    Image.new('RGB', size, color=color).save(buffer, format='PNG')
    return ImageProcessor.png_data_uri(buffer.getvalue())


class BrokenRasterizer(Rasterizer):
    def capture(self, layout, scale):
        raise RuntimeError("canvas is gone")


class TestRasterCapture(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.store = CardStore()
        self.surface = CardSurface(CardConfig())
        self.surface.attach(self.store)
        self.capture = RasterCapture()

    async def test_capture_is_oversampled(self):
        """Снимок в 3 раза больше предпросмотра"""
        captured = await self.capture.capture(self.surface)

        self.assertEqual(CAPTURE_SCALE, 3)
        self.assertEqual((captured.width, captured.height), (512 * 3, 323 * 3))
        image = Image.open(BytesIO(captured.png))
        self.assertEqual(image.size, (1536, 969))
        self.assertTrue(captured.data_uri.startswith('data:image/png;base64,'))

    async def test_extended_variant_size(self):
        self.surface.set_variant(CardVariant.EXTENDED)
        captured = await self.capture.capture(self.surface)
        self.assertEqual((captured.width, captured.height), (1620, 1020))

    async def test_transparent_corners(self):
        captured = await self.capture.capture(self.surface)
        image = Image.open(BytesIO(captured.png)).convert('RGBA')
        self.assertEqual(image.getpixel((0, 0))[3], 0)
        self.assertEqual(image.getpixel((image.width // 2, image.height // 2))[3], 255)

    async def test_photo_is_drawn(self):
        self.store.update('student_photo', png_data_uri('red'))

        captured = await self.capture.capture(self.surface)

        image = Image.open(BytesIO(captured.png)).convert('RGBA')
        # Центр рамки фото (28, 96, 120x152) в масштабе 3
        self.assertEqual(image.getpixel((88 * 3, 172 * 3))[:3], (255, 0, 0))

    async def test_surface_not_rendered(self):
        with self.assertRaises(SurfaceUnavailableError):
            await self.capture.capture(CardSurface())

    async def test_rasterizer_failure(self):
        capture = RasterCapture(rasterizer=BrokenRasterizer())
        with self.assertRaises(RasterCaptureError):
            await capture.capture(self.surface)

    async def test_corrupt_payload(self):
        self.store.update('school_logo', 'data:image/png;base64,AAAA')
        with self.assertRaises(RasterCaptureError):
            await self.capture.capture(self.surface)

    def test_preview_png(self):
        png = self.capture.preview_png(self.surface)
        self.assertEqual(Image.open(BytesIO(png)).size, (512, 323))


class TestWrapText(unittest.TestCase):

    def setUp(self):
        self.draw = ImageDraw.Draw(Image.new('RGB', (10, 10)))
        self.font = load_font(12)

    def test_short_text_single_line(self):
        self.assertEqual(wrap_text(self.draw, 'Budi', self.font, 200, 1), ['Budi'])

    def test_long_text_truncated(self):
        text = 'Kartu ini milik sekolah dan tidak dapat dipindahtangankan kepada siapapun juga ' * 3
        lines = wrap_text(self.draw, text, self.font, 150, 2)

        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[-1].endswith('…'))
        for line in lines:
            self.assertLessEqual(self.draw.textlength(line, font=self.font), 150)

    def test_long_word_is_split(self):
        lines = wrap_text(self.draw, 'A' * 200, self.font, 60, 3)
        self.assertEqual(len(lines), 3)
        for line in lines:
            self.assertLessEqual(self.draw.textlength(line, font=self.font), 60)


if __name__ == '__main__':
    unittest.main()
