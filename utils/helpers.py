# utils/helpers.py
import re
import logging

logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r'\s+')


def sanitize_filename(filename: str) -> str:
    """Очистка имени файла от недопустимых символов"""
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        filename = filename.replace(char, '_')
    return filename


def export_filename(student_name: str, extension: str, basename: str = 'kartu-pelajar') -> str:
    """Имя файла экспорта: kartu-pelajar-<Имя_Фамилия>.<ext> или kartu-pelajar.<ext>"""
    name = WHITESPACE_RE.sub('_', (student_name or '').strip())
    if not name:
        return f"{basename}.{extension}"
    return f"{basename}-{sanitize_filename(name)}.{extension}"


def format_file_size(bytes_size: int) -> str:
    """Форматирование размера файла"""
    if bytes_size == 0:
        return '0 B'
    for unit in ['B', 'KB', 'MB', 'GB']:
        if bytes_size < 1024.0:
            return f"{bytes_size:.2f} {unit}"
        bytes_size /= 1024.0
    return f"{bytes_size:.2f} TB"
