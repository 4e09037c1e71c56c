"""Обработчики исключений для FastAPI приложения."""
from http import HTTPStatus
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.common.exceptions import AppException
from src.common.schemas import CustomErrorResponse


logger = logging.getLogger('app')


def add_exception_handlers(app: FastAPI) -> None:
    """Добавляет обработчики кастомных исключений в приложение."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        body = CustomErrorResponse(
            code=int(exc.code),
            message=exc.message,
        ).model_dump()

        headers = None
        # Для 401 принято добавлять заголовок, чтобы понимать тип авторизации
        if exc.status_code == HTTPStatus.UNAUTHORIZED:
            headers = {'WWW-Authenticate': 'Bearer'}

        return JSONResponse(
            status_code=exc.status_code,
            content=body,
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        # 400 - если в запрос пришел невалидный JSON
        # 422 - если JSON валиден, но не проходит валидацию по схеме
        errors = exc.errors()
        is_json_decode_error = any(
            err.get('type') in ('json_invalid', 'value_error.jsondecode')
            for err in errors
        )

        if is_json_decode_error:
            body = CustomErrorResponse(
                code=HTTPStatus.BAD_REQUEST.value,
                message='Invalid request body, check JSON',
            ).model_dump()
            return JSONResponse(
                status_code=HTTPStatus.BAD_REQUEST.value,
                content=body,
            )

        first = errors[0] if errors else {}
        location = '.'.join(str(part) for part in first.get('loc', ()))
        message = first.get('msg', 'Validation error')
        body = CustomErrorResponse(
            code=HTTPStatus.UNPROCESSABLE_ENTITY.value,
            message=f'{location}: {message}' if location else message,
        ).model_dump()
        return JSONResponse(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY.value,
            content=body,
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        # Детали ошибки хранилища остаются только в логах
        logger.error(
            'Ошибка базы данных при обработке %s %s',
            request.method,
            request.url.path,
            exc_info=exc,
        )
        body = CustomErrorResponse(
            code=HTTPStatus.INTERNAL_SERVER_ERROR.value,
            message='Internal server error',
        ).model_dump()
        return JSONResponse(
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value,
            content=body,
        )
