"""Стандартные ответы API.

Содержит предопределенные ответы для различных HTTP статус кодов,
используемые в эндпоинтах API для обеспечения консистентности.
"""

from http import HTTPStatus
from typing import Any, Dict, Type

from pydantic import BaseModel

from src.common.schemas import CustomErrorResponse


ResponsesType = Dict[int | str, Dict[str, Any]]


def error_response(
    status_code: HTTPStatus,
    description: str,
) -> ResponsesType:
    """Создает шаблон ответа об ошибке с заданным статусом и описанием."""
    return {
        status_code.value: {
            'description': description,
            'model': CustomErrorResponse,
        },
    }


def success_response(
    status_code: HTTPStatus,
    schema: Type[BaseModel],
    description: str = 'Success',
) -> ResponsesType:
    """Создает шаблон успешного ответа со схемой тела."""
    return {
        status_code.value: {
            'description': description,
            'model': schema,
        },
    }
