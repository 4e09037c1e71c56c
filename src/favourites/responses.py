"""Ответы API для эндпоинтов избранного."""

from http import HTTPStatus

from src.common.errors import ERROR_401, ERROR_404, ERROR_409, ERROR_422
from src.common.responses import success_response
from src.common.schemas import MessageResponse
from src.favourites.schemas import FavouriteListResponse, FavouriteResponse


CREATE_RESPONSES = {
    **success_response(HTTPStatus.CREATED, FavouriteResponse),
    **ERROR_401,
    **ERROR_404,
    **ERROR_409,
}

LIST_RESPONSES = {
    **success_response(HTTPStatus.OK, FavouriteListResponse),
    **ERROR_401,
}

GET_BY_ID_RESPONSES = {
    **success_response(HTTPStatus.OK, FavouriteResponse),
    **ERROR_422,
    **ERROR_401,
    **ERROR_404,
}

UPDATE_RESPONSES = {
    **success_response(HTTPStatus.OK, FavouriteResponse),
    **ERROR_422,
    **ERROR_401,
    **ERROR_404,
    **ERROR_409,
}

DELETE_RESPONSES = {
    **success_response(HTTPStatus.OK, MessageResponse),
    **ERROR_422,
    **ERROR_401,
    **ERROR_404,
}
