"""
Точка входа для запуска приложения
"""
import os
import sys

# Добавляем корневую директорию в Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def main():
    from app import create_app
    from utils.logger import setup_logging

    setup_logging()
    app = create_app()

    # Получаем хост и порт из переменных окружения
    host = os.getenv('FLASK_HOST', '127.0.0.1')
    port = int(os.getenv('FLASK_PORT', 5000))

    print(f"🚀 Запуск Generator Kartu Pelajar на {host}:{port}")

    app.run(host=host, port=port, debug=False)


if __name__ == '__main__':
    main()
