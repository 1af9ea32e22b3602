# -*- coding: utf-8 -*-
# core/config.py
from dataclasses import dataclass
from typing import Dict, Tuple
import logging

from .models import CardVariant, CardSize, PixelSize

logger = logging.getLogger(__name__)

# Физический размер карточки (ширина × высота в мм), пропорции КТП
CARD_SIZE_MM = CardSize(85.6, 53.98)

# Размер предпросмотра в пикселях для каждого варианта
PREVIEW_SIZES: Dict[CardVariant, PixelSize] = {
    CardVariant.STANDARD: PixelSize(512, 323),
    CardVariant.EXTENDED: PixelSize(540, 340),
}

# Размер изображения в документе Word (пиксели при 96 dpi)
DOCUMENT_IMAGE_SIZES: Dict[CardVariant, PixelSize] = {
    CardVariant.STANDARD: PixelSize(512, 323),
    CardVariant.EXTENDED: PixelSize(540, 340),
}

# Коэффициент передискретизации при экспорте
CAPTURE_SCALE = 3

EXPORT_BASENAME = 'kartu-pelajar'

MIMETYPES = {
    'pdf': 'application/pdf',
    'docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'html': 'text/html',
}

PLACEHOLDERS: Dict[str, str] = {
    'school_name': 'Nama Sekolah',
    'school_address': 'Alamat Sekolah',
    'student_name': 'Nama Lengkap Siswa',
    'student_class': 'XII IPA 1',
    'nisn': '0012345678',
    'address': 'Jl. Merdeka No. 123',
    'principal_name': 'Nama Kepala Sekolah',
    'principal_nip': '19XXXXXXXX XXXXXX X XXX',
    'notes': 'Kartu ini milik sekolah dan tidak dapat dipindahtangankan.',
    'issue_place': 'Jakarta',
    'issue_day': '17',
    'issue_month': 'Juli',
    'issue_year': '2024',
}

# Подписи рамок-заглушек для изображений без данных
IMAGE_PLACEHOLDERS: Dict[str, str] = {
    'school_logo': 'Logo',
    'student_photo': 'Foto',
    'qr_code': 'QR Code',
}

LABELS: Dict[str, str] = {
    'title': 'Kartu Tanda Pelajar',
    'nisn': 'NISN',
    'student_class': 'Kelas',
    'address': 'Alamat',
    'acknowledged': 'Mengetahui,',
    'principal': 'Kepala Sekolah',
    'nip': 'NIP.',
    'notes': 'Catatan:',
}

# Подписи полей формы
FORM_LABELS: Dict[str, str] = {
    'school_name': 'Nama Sekolah',
    'school_address': 'Alamat Sekolah',
    'student_name': 'Nama Lengkap Siswa',
    'student_class': 'Kelas',
    'nisn': 'NISN',
    'address': 'Alamat',
    'principal_name': 'Nama Kepala Sekolah',
    'principal_nip': 'NIP Kepala Sekolah',
    'notes': 'Catatan',
    'issue_place': 'Tempat Terbit',
    'issue_day': 'Tanggal',
    'issue_month': 'Bulan',
    'issue_year': 'Tahun',
    'school_logo': 'Upload Logo Sekolah',
    'student_photo': 'Upload Foto Siswa',
    'qr_code': 'Upload QR Code',
    'watermark': 'Upload Watermark',
}

# Сообщения пользователю (на языке пользователя)
ALERT_MESSAGES: Dict[str, str] = {
    'pdf': 'Gagal membuat PDF. Silakan coba lagi.',
    'docx': 'Gagal membuat Word. Silakan coba lagi.',
    'print': 'Gagal mencetak kartu. Silakan coba lagi.',
    'print_blocked': 'Gagal membuka jendela cetak. Periksa pengaturan pemblokir pop-up pada browser Anda.',
    'busy': 'Ekspor lain sedang diproses. Tunggu hingga selesai.',
}


@dataclass
class CardConfig:
    variant: CardVariant = CardVariant.STANDARD
    capture_scale: int = CAPTURE_SCALE
    basename: str = EXPORT_BASENAME

    @property
    def preview_size(self) -> PixelSize:
        return PREVIEW_SIZES[self.variant]

    @property
    def document_image_size(self) -> PixelSize:
        return DOCUMENT_IMAGE_SIZES[self.variant]

    @property
    def page_size_mm(self) -> Tuple[float, float]:
        """Размер страницы PDF (альбомная ориентация)"""
        result = (CARD_SIZE_MM.width, CARD_SIZE_MM.height)
        logger.debug(f"Page size: {result}")
        return result

    @property
    def supports_issuance(self) -> bool:
        return self.variant == CardVariant.EXTENDED

    @classmethod
    def from_name(cls, name: str) -> 'CardConfig':
        try:
            return cls(variant=CardVariant(name))
        except ValueError:
            logger.warning(f"Неизвестный вариант карточки: {name}, используется standard")
            return cls()
