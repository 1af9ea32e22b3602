# tests/test_exporter.py
import asyncio
import unittest
import sys
import os
import threading
from io import BytesIO
from PyPDF2 import PdfReader

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from core.card_app import StudentCardApp
from core.card_store import CardStore
from core.config import ALERT_MESSAGES, CardConfig
from core.exceptions import PrintContextError
from core.exporter import ExportPipeline
from core.models import CardRecord, ExportFormat, ExportStatus
from core.print_service import HtmlPrintTarget, PrintTarget
from processing.card_renderer import CardSurface
from processing.raster_capture import PillowRasterizer, RasterCapture, Rasterizer

MM_TO_PT = 72 / 25.4


class CountingRasterizer(PillowRasterizer):
    def __init__(self):
        self.layouts = []

    def capture(self, layout, scale):
        self.layouts.append(layout)
        return super().capture(layout, scale)


class BlockingRasterizer(PillowRasterizer):
    """Растеризация ждет, пока тест не разрешит продолжить"""

    def __init__(self):
        self.release = threading.Event()

    def capture(self, layout, scale):
        self.release.wait(timeout=5)
        return super().capture(layout, scale)


class BrokenRasterizer(Rasterizer):
    def capture(self, layout, scale):
        raise RuntimeError("rasterizer crashed")


class BlockedPrintTarget(PrintTarget):
    def open(self, html):
        raise PrintContextError("popup blocked")


class TestExportPipeline(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.rasterizer = CountingRasterizer()
        self.build_pipeline(self.rasterizer)

    def build_pipeline(self, rasterizer, attach=True):
        self.store = CardStore()
        self.surface = CardSurface(CardConfig())
        if attach:
            self.surface.attach(self.store)
        self.pipeline = ExportPipeline(self.store, self.surface, RasterCapture(rasterizer))

    async def test_pdf_export(self):
        self.store.update('student_name', 'Budi Santoso')

        result = await self.pipeline.export_pdf()

        self.assertEqual(result.status, ExportStatus.COMPLETED)
        self.assertEqual(result.filename, 'kartu-pelajar-Budi_Santoso.pdf')
        self.assertEqual(result.mimetype, 'application/pdf')
        self.assertTrue(result.data.startswith(b'%PDF'))

    async def test_docx_export(self):
        self.store.update('student_name', 'Budi Santoso')

        result = await self.pipeline.export_docx()

        self.assertTrue(result.success)
        self.assertEqual(result.filename, 'kartu-pelajar-Budi_Santoso.docx')
        self.assertTrue(result.data.startswith(b'PK'))

    async def test_default_filenames(self):
        pdf = await self.pipeline.export_pdf()
        docx = await self.pipeline.export_docx()
        self.assertEqual(pdf.filename, 'kartu-pelajar.pdf')
        self.assertEqual(docx.filename, 'kartu-pelajar.docx')

    async def test_print(self):
        target = HtmlPrintTarget()

        result = await self.pipeline.print_card(target)

        self.assertEqual(result.export_format, ExportFormat.PRINT)
        self.assertTrue(result.success)
        self.assertIn('window.print()', target.html)
        self.assertIn('data:image/png;base64,', target.html)
        self.assertEqual(result.data.decode('utf-8'), target.html)

    async def test_print_blocked(self):
        result = await self.pipeline.print_card(BlockedPrintTarget())

        self.assertEqual(result.status, ExportStatus.FAILED)
        self.assertEqual(result.message, ALERT_MESSAGES['print_blocked'])
        self.assertFalse(self.pipeline.busy)

    async def test_every_export_takes_fresh_capture(self):
        await self.pipeline.export_pdf()
        self.store.update('student_name', 'Ani')
        await self.pipeline.export_pdf()

        self.assertEqual(len(self.rasterizer.layouts), 2)
        self.assertEqual(self.rasterizer.layouts[1].text_for('student_name'), 'Ani')

    async def test_mutual_exclusion(self):
        """Пока идет экспорт, любой другой запуск ничего не делает"""
        rasterizer = BlockingRasterizer()
        self.build_pipeline(rasterizer)

        first = asyncio.create_task(self.pipeline.export_pdf())
        for _ in range(100):
            if self.pipeline.busy:
                break
            await asyncio.sleep(0.01)
        self.assertTrue(self.pipeline.busy)

        skipped = [
            await self.pipeline.export_pdf(),
            await self.pipeline.export_docx(),
            await self.pipeline.print_card(HtmlPrintTarget()),
        ]
        rasterizer.release.set()
        result = await first

        for item in skipped:
            self.assertEqual(item.status, ExportStatus.SKIPPED)
            self.assertEqual(item.data, b'')
        self.assertEqual(result.status, ExportStatus.COMPLETED)
        self.assertFalse(self.pipeline.busy)

    async def test_capture_failure(self):
        self.build_pipeline(BrokenRasterizer())
        self.store.update('student_name', 'Budi')

        result = await self.pipeline.export_pdf()

        self.assertEqual(result.status, ExportStatus.FAILED)
        self.assertEqual(result.message, ALERT_MESSAGES['pdf'])
        self.assertEqual(result.data, b'')
        self.assertFalse(self.pipeline.busy)
        self.assertEqual(self.store.record, CardRecord(student_name='Budi'))

    async def test_docx_capture_failure_message(self):
        self.build_pipeline(BrokenRasterizer())
        result = await self.pipeline.export_docx()
        self.assertEqual(result.message, ALERT_MESSAGES['docx'])

    async def test_surface_not_ready(self):
        self.build_pipeline(PillowRasterizer(), attach=False)

        result = await self.pipeline.export_pdf()

        self.assertEqual(result.status, ExportStatus.FAILED)
        self.assertFalse(self.pipeline.busy)


class TestStudentCardApp(unittest.IsolatedAsyncioTestCase):

    async def test_end_to_end_pdf(self):
        """Имя «Ani», класс «X-1» -> kartu-pelajar-Ani.pdf на одной странице"""
        card_app = StudentCardApp()
        card_app.input.apply_text('student_name', 'Ani')
        card_app.input.apply_text('student_class', 'X-1')

        result = await card_app.exporter.export_pdf()

        self.assertEqual(result.filename, 'kartu-pelajar-Ani.pdf')
        self.assertEqual(card_app.surface.layout.text_for('student_name'), 'Ani')
        self.assertEqual(card_app.surface.layout.text_for('student_class'), 'X-1')

        reader = PdfReader(BytesIO(result.data))
        self.assertEqual(len(reader.pages), 1)
        box = reader.pages[0].mediabox
        self.assertAlmostEqual(float(box.width), 85.6 * MM_TO_PT, places=1)
        self.assertAlmostEqual(float(box.height), 53.98 * MM_TO_PT, places=1)

    async def test_extended_variant_docx(self):
        card_app = StudentCardApp()
        card_app.set_variant('extended')

        result = await card_app.exporter.export_docx()

        self.assertTrue(result.success)
        self.assertEqual(card_app.surface.layout.size.width, 540)

    def test_unknown_variant_falls_back(self):
        card_app = StudentCardApp()
        card_app.set_variant('poster')
        self.assertEqual(card_app.variant.value, 'standard')

    def test_preview(self):
        card_app = StudentCardApp()
        self.assertTrue(card_app.preview_png().startswith(b'\x89PNG'))


if __name__ == '__main__':
    unittest.main()
