"""Ответы API для эндпоинтов объектов недвижимости."""

from http import HTTPStatus

from src.common.errors import (
    ERROR_400,
    ERROR_401,
    ERROR_403,
    ERROR_404,
    ERROR_409,
    ERROR_422,
    ERROR_500,
)
from src.common.responses import success_response
from src.common.schemas import MessageResponse
from src.properties.schemas import (
    FilteredPropertiesResponse,
    PropertyDataResponse,
    PropertyWriteResponse,
)


SEARCH_RESPONSES = {
    **success_response(HTTPStatus.OK, FilteredPropertiesResponse),
    **ERROR_400,
    **ERROR_401,
    **ERROR_500,
}

CREATE_RESPONSES = {
    **success_response(
        HTTPStatus.CREATED,
        PropertyWriteResponse,
        'Property created',
    ),
    **ERROR_400,
    **ERROR_401,
    **ERROR_409,
    **ERROR_422,
}

GET_BY_ID_RESPONSES = {
    **success_response(HTTPStatus.OK, PropertyDataResponse),
    **ERROR_404,
}

UPDATE_RESPONSES = {
    **success_response(HTTPStatus.OK, PropertyWriteResponse),
    **ERROR_401,
    **ERROR_403,
    **ERROR_404,
    **ERROR_422,
}

DELETE_RESPONSES = {
    **success_response(HTTPStatus.OK, MessageResponse),
    **ERROR_401,
    **ERROR_403,
    **ERROR_404,
}
