"""
Flask routes для web-интерфейса
"""
import logging
from io import BytesIO

from flask import render_template, request, send_file, jsonify, session, Response

from core import (
    TEXT_FIELDS, IMAGE_FIELDS, ISSUANCE_FIELDS,
    CardVariant, ExportStatus, HtmlPrintTarget
)
from core.config import ALERT_MESSAGES, FORM_LABELS, PLACEHOLDERS
from core.exceptions import StudentCardException, UnknownFieldError
from web.utils import (
    allowed_file, new_session_id, get_card_app,
    cleanup_session, cleanup_old_sessions
)

logger = logging.getLogger(__name__)

SESSION_KEY = 'card_session'


def _current_card_app():
    if SESSION_KEY not in session:
        session[SESSION_KEY] = new_session_id()
    return get_card_app(session[SESSION_KEY])


def configure_routes(app):
    """Настройка маршрутов Flask"""

    @app.route('/')
    def index():
        """Главная страница: форма и предпросмотр"""
        card_app = _current_card_app()
        cleanup_old_sessions()
        text_fields = [f for f in TEXT_FIELDS
                       if f not in ISSUANCE_FIELDS or card_app.config.supports_issuance]
        image_fields = [f for f in IMAGE_FIELDS
                        if f != 'watermark' or card_app.config.supports_issuance]
        return render_template(
            'index.html',
            record=card_app.record,
            text_fields=text_fields,
            image_fields=image_fields,
            labels=FORM_LABELS,
            placeholders=PLACEHOLDERS,
            variant=card_app.variant.value,
            variants=[v.value for v in CardVariant],
        )

    @app.route('/preview.png')
    def preview():
        """Предварительный просмотр карточки"""
        card_app = _current_card_app()
        try:
            png = card_app.preview_png()
        except StudentCardException as e:
            logger.error(f"Ошибка превью: {e}")
            return jsonify({'error': str(e)}), 500
        response = send_file(BytesIO(png), mimetype='image/png')
        response.headers['Cache-Control'] = 'no-store'
        return response

    @app.route('/field', methods=['POST'])
    def update_field():
        """Изменение текстового поля"""
        data = request.get_json(silent=True) or request.form
        name = data.get('name', '')
        value = data.get('value', '')
        try:
            _current_card_app().input.apply_text(name, value)
        except UnknownFieldError:
            return jsonify({'error': f'Неизвестное поле: {name}'}), 400
        return jsonify({'success': True}), 200

    @app.route('/image', methods=['POST'])
    async def update_image():
        """Загрузка изображения в поле карточки"""
        card_app = _current_card_app()
        updated = {}
        for name in request.files:
            if name not in IMAGE_FIELDS:
                return jsonify({'error': f'Неизвестное поле: {name}'}), 400
            file = request.files[name]
            if not file.filename:
                updated[name] = False
                continue
            if not allowed_file(file.filename):
                logger.warning(f"Неподдерживаемый формат файла: {file.filename}")
                updated[name] = False
                continue
            record = await card_app.input.apply_image(name, file.stream)
            updated[name] = record is not None
        return jsonify({'updated': updated}), 200

    @app.route('/variant', methods=['POST'])
    def set_variant():
        data = request.get_json(silent=True) or request.form
        _current_card_app().set_variant(data.get('variant', CardVariant.STANDARD.value))
        return jsonify({'variant': _current_card_app().variant.value}), 200

    @app.route('/reset', methods=['POST'])
    def reset():
        """Новая пустая карточка"""
        _current_card_app().reset()
        return jsonify({'success': True}), 200

    @app.route('/export/<export_format>', methods=['POST'])
    async def export(export_format):
        """Экспорт карточки в PDF, Word или печать"""
        card_app = _current_card_app()
        if export_format == 'pdf':
            result = await card_app.exporter.export_pdf()
        elif export_format == 'docx':
            result = await card_app.exporter.export_docx()
        elif export_format == 'print':
            result = await card_app.exporter.print_card(HtmlPrintTarget())
        else:
            return jsonify({'error': f'Неизвестный формат: {export_format}'}), 404

        if result.status == ExportStatus.SKIPPED:
            return jsonify({'error': ALERT_MESSAGES['busy'], 'skipped': True}), 409
        if result.status == ExportStatus.FAILED:
            return jsonify({'error': result.message}), 500

        if export_format == 'print':
            return Response(result.data, mimetype=result.mimetype)

        logger.info(f"Скачивание файла: {result.filename}")
        return send_file(BytesIO(result.data), mimetype=result.mimetype,
                         as_attachment=True, download_name=result.filename)

    @app.route('/cleanup', methods=['POST'])
    def cleanup():
        """Завершение сессии"""
        session_id = session.pop(SESSION_KEY, None)
        if session_id:
            cleanup_session(session_id)
        return jsonify({'success': True}), 200
