"""
Хранилище единственной карточки сессии
"""
import logging
from threading import RLock
from typing import Callable, List

from .models import CardRecord

logger = logging.getLogger(__name__)

Listener = Callable[[CardRecord], None]


class CardStore:
    def __init__(self, record: CardRecord = None):
        self._record = record if record is not None else CardRecord()
        self._listeners: List[Listener] = []
        # Слушатели вызываются под блокировкой: порядок уведомлений совпадает с порядком записей
        self._lock = RLock()

    @property
    def record(self) -> CardRecord:
        return self._record

    def update(self, key: str, value) -> CardRecord:
        """Заменить запись новой, отличающейся только полем key"""
        with self._lock:
            self._record = self._record.replace_field(key, value)
            record = self._record
            logger.debug(f"Поле обновлено: {key}")
            self._notify(record)
        return record

    def reset(self) -> CardRecord:
        with self._lock:
            self._record = CardRecord()
            record = self._record
            logger.info("Карточка сброшена к значениям по умолчанию")
            self._notify(record)
        return record

    def refresh(self) -> CardRecord:
        """Повторно уведомить слушателей текущей записью"""
        with self._lock:
            record = self._record
            self._notify(record)
        return record

    def subscribe(self, listener: Listener):
        self._listeners.append(listener)

    def _notify(self, record: CardRecord):
        for listener in self._listeners:
            listener(record)
