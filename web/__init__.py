"""
Web module for Student Card Generator
"""

from .utils import (
    allowed_file,
    new_session_id,
    get_card_app,
    cleanup_session,
    cleanup_old_sessions,
    session_store
)
from .routes import configure_routes

__all__ = [
    'allowed_file',
    'new_session_id',
    'get_card_app',
    'cleanup_session',
    'cleanup_old_sessions',
    'session_store',
    'configure_routes'
]
