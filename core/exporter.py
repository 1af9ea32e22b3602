"""
Экспорт карточки: PDF, Word и печать
"""
import asyncio
import logging
from threading import Lock
from typing import Awaitable, Callable

from utils.helpers import export_filename, format_file_size
from .card_store import CardStore
from .config import CardConfig, ALERT_MESSAGES, MIMETYPES
from .document_generator import DocumentBuilder, DocxGenerator
from .exceptions import StudentCardException, PrintContextError
from .models import ExportFormat, ExportResult, ExportStatus
from .pdf_generator import PdfBuilder, PDFGenerator
from .print_service import PrintTarget, build_print_page

logger = logging.getLogger(__name__)


class ExportPipeline:
    """Три независимых способа экспорта текущей карточки.

    Пока выполняется любой экспорт, новые запуски (включая тот же формат)
    ничего не делают и возвращают ExportStatus.SKIPPED. Каждый экспорт
    делает собственный свежий снимок карточки.
    """

    def __init__(self, store: CardStore, surface, raster_capture,
                 pdf_builder: PdfBuilder = None, document_builder: DocumentBuilder = None):
        self.store = store
        self.surface = surface
        self.raster_capture = raster_capture
        self.pdf_builder = pdf_builder or PDFGenerator()
        self.document_builder = document_builder or DocxGenerator()
        self._busy = Lock()

    @property
    def config(self) -> CardConfig:
        return self.surface.config

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    async def export_pdf(self) -> ExportResult:
        async def build() -> ExportResult:
            student_name = self.store.record.student_name
            captured = await self.raster_capture.capture(self.surface)
            data = await asyncio.to_thread(self.pdf_builder.embed, captured.png, self.config.page_size_mm)
            return self._artifact(ExportFormat.PDF, student_name, data)

        return await self._run(ExportFormat.PDF, 'pdf', build)

    async def export_docx(self) -> ExportResult:
        async def build() -> ExportResult:
            student_name = self.store.record.student_name
            captured = await self.raster_capture.capture(self.surface)
            data = await asyncio.to_thread(self.document_builder.embed, captured.png,
                                           self.config.document_image_size)
            return self._artifact(ExportFormat.DOCX, student_name, data)

        return await self._run(ExportFormat.DOCX, 'docx', build)

    async def print_card(self, target: PrintTarget) -> ExportResult:
        async def build() -> ExportResult:
            captured = await self.raster_capture.capture(self.surface)
            html = build_print_page(captured.data_uri)
            try:
                await asyncio.to_thread(target.open, html)
            except PrintContextError as e:
                logger.error(f"Не удалось открыть окно печати: {e}")
                return ExportResult.failed(ExportFormat.PRINT, ALERT_MESSAGES['print_blocked'])
            return ExportResult(ExportStatus.COMPLETED, ExportFormat.PRINT,
                                mimetype=MIMETYPES['html'], data=html.encode('utf-8'))

        return await self._run(ExportFormat.PRINT, 'print', build)

    async def _run(self, export_format: ExportFormat, alert_key: str,
                   build: Callable[[], Awaitable[ExportResult]]) -> ExportResult:
        if not self._busy.acquire(blocking=False):
            logger.info(f"Экспорт {export_format.value} пропущен: выполняется другой экспорт")
            return ExportResult.skipped(export_format)

        try:
            logger.info(f"Начало экспорта: {export_format.value}")
            result = await build()
        except (StudentCardException, OSError) as e:
            logger.error(f"Ошибка экспорта {export_format.value}: {e}")
            result = ExportResult.failed(export_format, ALERT_MESSAGES[alert_key])
        finally:
            self._busy.release()

        if result.success:
            logger.info(f"✅ Экспорт {export_format.value} завершен: {result.filename or 'print'} ({format_file_size(len(result.data))})")
        return result

    def _artifact(self, export_format: ExportFormat, student_name: str, data: bytes) -> ExportResult:
        extension = export_format.value
        filename = export_filename(student_name, extension, self.config.basename)
        return ExportResult(ExportStatus.COMPLETED, export_format, filename=filename,
                            mimetype=MIMETYPES[extension], data=data)
