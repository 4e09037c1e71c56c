"""Кастомные исключения для проекта."""
from dataclasses import dataclass
from http import HTTPStatus


@dataclass
class AppException(Exception):
    """Базовое исключение приложения."""

    status_code: int
    code: int
    message: str


class BadRequestException(AppException):
    """Ошибка в параметрах запроса."""

    def __init__(self, message: str = 'Invalid request parameters') -> None:
        """Инициализирует ошибку запроса (HTTP 400)."""
        super().__init__(
            status_code=HTTPStatus.BAD_REQUEST,
            code=HTTPStatus.BAD_REQUEST,
            message=message,
        )


class NotAuthorizedException(AppException):
    """Ошибка неавторизированного пользователя."""

    def __init__(self, message: str = 'Not authenticated') -> None:
        """Инициализирует ошибку неавторизированного пользователя."""
        super().__init__(
            status_code=HTTPStatus.UNAUTHORIZED,
            code=HTTPStatus.UNAUTHORIZED,
            message=message,
        )


class ForbiddenException(AppException):
    """Ошибка доступа запрещен."""

    def __init__(self, message: str = 'Access denied') -> None:
        """Инициализирует ошибку доступа запрещен."""
        super().__init__(
            status_code=HTTPStatus.FORBIDDEN,
            code=HTTPStatus.FORBIDDEN,
            message=message,
        )


class NotFoundException(AppException):
    """Ошибка данные не найдены."""

    def __init__(self, message: str = 'Not found') -> None:
        """Инициализирует ошибку данные не найдены."""
        super().__init__(
            status_code=HTTPStatus.NOT_FOUND,
            code=HTTPStatus.NOT_FOUND,
            message=message,
        )


class ConflictException(AppException):
    """Ошибка конфликта уникальных данных."""

    def __init__(self, message: str = 'Resource already exists') -> None:
        """Инициализирует ошибку конфликта (HTTP 409)."""
        super().__init__(
            status_code=HTTPStatus.CONFLICT,
            code=HTTPStatus.CONFLICT,
            message=message,
        )
