# -*- coding: utf-8 -*-
# core/exceptions.py
class StudentCardException(Exception):
    """Базовое исключение приложения"""
    pass

class UnknownFieldError(StudentCardException, KeyError):
    """Неизвестное поле карточки"""
    pass

class ImageReadError(StudentCardException):
    """Ошибка чтения изображения"""
    pass

class SurfaceUnavailableError(StudentCardException):
    """Карточка еще не отрисована"""
    pass

class RasterCaptureError(StudentCardException):
    """Ошибка растеризации карточки"""
    pass

class PDFGenerationError(StudentCardException):
    """Ошибка генерации PDF"""
    pass

class DocumentGenerationError(StudentCardException):
    """Ошибка генерации документа Word"""
    pass

class PrintContextError(StudentCardException):
    """Не удалось открыть окно печати"""
    pass
