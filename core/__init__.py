"""
Core module for Student Card Generator
"""

from .models import (
    CardVariant, ExportFormat, ExportStatus,
    CardRecord, CardSize, PixelSize, ExportResult,
    FIELD_NAMES, TEXT_FIELDS, IMAGE_FIELDS, ISSUANCE_FIELDS
)
from .config import CardConfig
from .card_store import CardStore
from .input_capture import InputCapture
from .pdf_generator import PdfBuilder, PDFGenerator
from .document_generator import DocumentBuilder, DocxGenerator
from .print_service import PrintTarget, HtmlPrintTarget, BrowserPrintTarget, build_print_page
from .exporter import ExportPipeline

__all__ = [
    'CardVariant',
    'ExportFormat',
    'ExportStatus',
    'CardRecord',
    'CardSize',
    'PixelSize',
    'ExportResult',
    'FIELD_NAMES',
    'TEXT_FIELDS',
    'IMAGE_FIELDS',
    'ISSUANCE_FIELDS',
    'CardConfig',
    'CardStore',
    'InputCapture',
    'PdfBuilder',
    'PDFGenerator',
    'DocumentBuilder',
    'DocxGenerator',
    'PrintTarget',
    'HtmlPrintTarget',
    'BrowserPrintTarget',
    'build_print_page',
    'ExportPipeline'
]
