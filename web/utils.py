"""
Вспомогательные функции для web-интерфейса
"""
import logging
import uuid
from datetime import datetime, timedelta
from threading import Lock

from config import ALLOWED_EXTENSIONS, SESSION_LIFETIME_SECONDS

logger = logging.getLogger(__name__)

# Карточки текущих сессий браузера (только в памяти)
session_store = {}
_store_lock = Lock()


def allowed_file(filename):
    """Проверка разрешенных расширений файлов"""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def new_session_id() -> str:
    return uuid.uuid4().hex


def get_card_app(session_id):
    """Карточка сессии; создается при первом обращении"""
    from core.card_app import StudentCardApp

    with _store_lock:
        card_app = session_store.get(session_id)
        if card_app is None:
            card_app = StudentCardApp()
            session_store[session_id] = card_app
            logger.info(f"Создана карточка для сессии {session_id}")
    card_app.touch()
    return card_app


def cleanup_session(session_id):
    """Удаление карточки сессии"""
    with _store_lock:
        if session_store.pop(session_id, None) is not None:
            logger.info(f"Очищена сессия: {session_id}")


def cleanup_old_sessions():
    """Периодическая очистка старых сессий"""
    cutoff_time = datetime.now() - timedelta(seconds=SESSION_LIFETIME_SECONDS)

    with _store_lock:
        expired = [sid for sid, card_app in session_store.items()
                   if card_app.last_used < cutoff_time and not card_app.exporter.busy]
        for session_id in expired:
            del session_store[session_id]
            logger.info(f"Автоочистка сессии: {session_id}")

    return len(expired)
