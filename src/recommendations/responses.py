"""Ответы API для эндпоинтов рекомендаций."""

from http import HTTPStatus

from src.common.errors import (
    ERROR_400,
    ERROR_401,
    ERROR_404,
    ERROR_409,
    ERROR_422,
)
from src.common.responses import success_response
from src.recommendations.schemas import (
    RecommendationCreated,
    RecommendationsResponse,
)
from src.users.schemas import UserSearchResponse


SEARCH_USERS_RESPONSES = {
    **success_response(HTTPStatus.OK, UserSearchResponse),
    **ERROR_400,
    **ERROR_401,
}

RECOMMEND_RESPONSES = {
    **success_response(
        HTTPStatus.CREATED,
        RecommendationCreated,
        'Recommendation created',
    ),
    **ERROR_400,
    **ERROR_401,
    **ERROR_404,
    **ERROR_409,
    **ERROR_422,
}

LIST_RESPONSES = {
    **success_response(HTTPStatus.OK, RecommendationsResponse),
    **ERROR_401,
}
