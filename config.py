"""
Конфигурационные настройки приложения
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).parent
TEMPLATE_FOLDER = BASE_DIR / 'templates'
LOG_FOLDER = Path(os.getenv('LOG_FOLDER', BASE_DIR / 'logs'))

# Настройки приложения
SECRET_KEY = os.getenv('SECRET_KEY', 'your-secret-key-change-in-production')
MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB

# Время жизни карточки без обращений
SESSION_LIFETIME_SECONDS = 3600

# Поддерживаемые форматы изображений
ALLOWED_EXTENSIONS = {'jpg', 'jpeg', 'png', 'gif', 'bmp', 'webp', 'tiff', 'tif'}

# ПРОСТАЯ настройка логирования для basicConfig
LOGGING_CONFIG = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'datefmt': '%Y-%m-%d %H:%M:%S'
}
