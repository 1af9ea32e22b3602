"""
Data classes и Enum для генератора карточек учащихся
"""
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Optional, Tuple

from .exceptions import UnknownFieldError


class CardVariant(Enum):
    STANDARD = "standard"
    EXTENDED = "extended"


class ExportFormat(Enum):
    PDF = "pdf"
    DOCX = "docx"
    PRINT = "print"


class ExportStatus(Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CardRecord:
    """Все поля карточки. Пустая строка / None означает «показать заглушку»."""
    school_name: str = ''
    school_address: str = ''
    student_name: str = ''
    student_class: str = ''
    nisn: str = ''
    address: str = ''
    principal_name: str = ''
    principal_nip: str = ''
    notes: str = ''
    # Только для расширенного варианта
    issue_place: str = ''
    issue_day: str = ''
    issue_month: str = ''
    issue_year: str = ''
    # data URI изображений
    school_logo: Optional[str] = None
    student_photo: Optional[str] = None
    qr_code: Optional[str] = None
    watermark: Optional[str] = None

    def replace_field(self, key: str, value) -> 'CardRecord':
        if key not in FIELD_NAMES:
            raise UnknownFieldError(key)
        return replace(self, **{key: value})

    def get(self, key: str):
        if key not in FIELD_NAMES:
            raise UnknownFieldError(key)
        return getattr(self, key)


FIELD_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(CardRecord))

IMAGE_FIELDS: Tuple[str, ...] = ('school_logo', 'student_photo', 'qr_code', 'watermark')

TEXT_FIELDS: Tuple[str, ...] = tuple(name for name in FIELD_NAMES if name not in IMAGE_FIELDS)

ISSUANCE_FIELDS: Tuple[str, ...] = ('issue_place', 'issue_day', 'issue_month', 'issue_year')


@dataclass(frozen=True)
class CardSize:
    """Физический размер карточки в мм"""
    width: float
    height: float

    @property
    def ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class PixelSize:
    width: int
    height: int

    def scaled(self, factor: int) -> 'PixelSize':
        return PixelSize(self.width * factor, self.height * factor)

    @property
    def ratio(self) -> float:
        return self.width / self.height


@dataclass
class ExportResult:
    status: ExportStatus
    export_format: ExportFormat
    filename: str = ''
    mimetype: str = ''
    data: bytes = b''
    message: str = ''

    @property
    def success(self) -> bool:
        return self.status == ExportStatus.COMPLETED

    @classmethod
    def skipped(cls, export_format: ExportFormat) -> 'ExportResult':
        return cls(ExportStatus.SKIPPED, export_format)

    @classmethod
    def failed(cls, export_format: ExportFormat, message: str) -> 'ExportResult':
        return cls(ExportStatus.FAILED, export_format, message=message)
