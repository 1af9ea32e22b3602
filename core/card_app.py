"""
Главный класс приложения: одна карточка, ее предпросмотр и экспорт
"""
import logging
from datetime import datetime

from processing.card_renderer import CardSurface
from processing.raster_capture import RasterCapture
from .card_store import CardStore
from .config import CardConfig
from .exporter import ExportPipeline
from .input_capture import InputCapture
from .models import CardVariant

logger = logging.getLogger(__name__)


class StudentCardApp:
    def __init__(self, config: CardConfig = None):
        self.config = config or CardConfig()
        self.store = CardStore()
        self.surface = CardSurface(self.config)
        self.surface.attach(self.store)
        self.input = InputCapture(self.store)
        self.raster_capture = RasterCapture(scale=self.config.capture_scale)
        self.exporter = ExportPipeline(self.store, self.surface, self.raster_capture)
        self.last_used = datetime.now()
        logger.info(f"Новая карточка, вариант: {self.config.variant.value}")

    @property
    def record(self):
        return self.store.record

    def touch(self):
        self.last_used = datetime.now()

    def preview_png(self) -> bytes:
        return self.raster_capture.preview_png(self.surface)

    def set_variant(self, name: str):
        self.surface.set_variant(CardConfig.from_name(name).variant)

    @property
    def variant(self) -> CardVariant:
        return self.config.variant

    def reset(self):
        self.store.reset()
