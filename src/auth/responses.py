"""Ответы API для эндпоинтов авторизации."""

from http import HTTPStatus

from src.common.errors import (
    ERROR_400,
    ERROR_401,
    ERROR_403,
    ERROR_409,
    ERROR_422,
)
from src.common.responses import success_response
from src.users.schemas import AuthResponse, RefreshResponse


SIGNUP_RESPONSES = {
    **success_response(
        HTTPStatus.CREATED,
        AuthResponse,
        'User registered',
    ),
    **ERROR_400,
    **ERROR_409,
    **ERROR_422,
}

LOGIN_RESPONSES = {
    **success_response(HTTPStatus.OK, AuthResponse, 'Login successful'),
    **ERROR_401,
    **ERROR_422,
}

REFRESH_RESPONSES = {
    **success_response(HTTPStatus.OK, RefreshResponse, 'Token refreshed'),
    **ERROR_401,
    **ERROR_403,
}
