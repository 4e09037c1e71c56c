"""Общие ответы сервера 4хх и 5хх статуса."""

from http import HTTPStatus

from src.common.responses import error_response


ERROR_400 = error_response(
    HTTPStatus.BAD_REQUEST,
    'Invalid request parameters',
)
ERROR_401 = error_response(
    HTTPStatus.UNAUTHORIZED,
    'Not authenticated',
)
ERROR_403 = error_response(
    HTTPStatus.FORBIDDEN,
    'Access denied',
)
ERROR_404 = error_response(
    HTTPStatus.NOT_FOUND,
    'Not found',
)
ERROR_409 = error_response(
    HTTPStatus.CONFLICT,
    'Resource already exists',
)
ERROR_422 = error_response(
    HTTPStatus.UNPROCESSABLE_ENTITY,
    'Validation error',
)
ERROR_500 = error_response(
    HTTPStatus.INTERNAL_SERVER_ERROR,
    'Internal server error',
)
