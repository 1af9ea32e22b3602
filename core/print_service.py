"""
Печать карточки через окно браузера
"""
import logging
import tempfile
import webbrowser
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment

from .exceptions import PrintContextError

logger = logging.getLogger(__name__)

# Окно закрывается после вызова диалога печати
CLOSE_DELAY_MS = 500

PRINT_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
<style>
  @page { margin: 0; }
  html, body { margin: 0; padding: 0; width: 100%; height: 100%; }
  img { display: block; width: 100%; height: 100%; object-fit: contain; }
</style>
</head>
<body onload="window.print(); setTimeout(function () { window.close(); }, {{ close_delay }});">
<img src="{{ image }}" alt="{{ title }}">
</body>
</html>
"""

_environment = Environment(autoescape=True)


def build_print_page(image_data_uri: str, title: str = 'Cetak Kartu Pelajar') -> str:
    """HTML страница, содержащая только изображение карточки"""
    template = _environment.from_string(PRINT_PAGE_TEMPLATE)
    return template.render(image=image_data_uri, title=title, close_delay=CLOSE_DELAY_MS)


class PrintTarget(ABC):
    @abstractmethod
    def open(self, html: str):
        """Открыть страницу печати; PrintContextError если окно не открылось"""


class HtmlPrintTarget(PrintTarget):
    """Страница отдается браузеру пользователя в ответе HTTP"""

    def __init__(self):
        self.html: Optional[str] = None

    def open(self, html: str):
        self.html = html


class BrowserPrintTarget(PrintTarget):
    """Открывает страницу печати в новом окне системного браузера"""

    def __init__(self):
        self.temp_files: List[Path] = []

    def open(self, html: str):
        with tempfile.NamedTemporaryFile('w', suffix='_print.html', encoding='utf-8',
                                         delete=False) as f:
            f.write(html)
            page = Path(f.name)
        self.temp_files.append(page)

        try:
            opened = webbrowser.open(page.as_uri(), new=1)
        except webbrowser.Error as e:
            raise PrintContextError(str(e)) from e
        if not opened:
            raise PrintContextError("Браузер не открыл окно печати")
        logger.info(f"Окно печати открыто: {page}")

    def cleanup(self):
        for temp_file in self.temp_files:
            try:
                temp_file.unlink(missing_ok=True)
            except OSError as e:
                logger.warning(f"Не удалось удалить {temp_file}: {e}")
        self.temp_files.clear()
