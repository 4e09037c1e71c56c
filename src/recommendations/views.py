from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.sessions import get_async_session
from src.recommendations.responses import (
    LIST_RESPONSES,
    RECOMMEND_RESPONSES,
    SEARCH_USERS_RESPONSES,
)
from src.recommendations.schemas import (
    RecommendationCreate,
    RecommendationCreated,
    RecommendationsResponse,
)
from src.recommendations.services import recommendation_service
from src.users.dependencies import get_current_user
from src.users.models import User
from src.users.schemas import UserSearchResponse


router = APIRouter()


@router.get(
    '/search-users',
    response_model=UserSearchResponse,
    summary='Поиск пользователей по email',
    description='Поиск по подстроке email без учёта регистра, до 15 записей.',
    responses=SEARCH_USERS_RESPONSES,
)
async def search_users(
    search_email: Optional[str] = Query(None, alias='searchEmail'),
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Поиск получателей рекомендации."""
    return await recommendation_service.search_users(
        session,
        search_email=search_email,
    )


@router.post(
    '/recommend-property',
    response_model=RecommendationCreated,
    status_code=status.HTTP_201_CREATED,
    summary='Рекомендация объекта пользователю',
    responses=RECOMMEND_RESPONSES,
)
async def recommend_property(
    recommendation_in: RecommendationCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Рекомендация объекта другому пользователю по email."""
    return await recommendation_service.recommend(
        session,
        obj_in=recommendation_in,
        current_user=current_user,
    )


@router.get(
    '/',
    response_model=RecommendationsResponse,
    summary='Полученные и отправленные рекомендации',
    responses=LIST_RESPONSES,
)
async def list_recommendations(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Рекомендации текущего пользователя, новые первыми."""
    return await recommendation_service.list_recommendations(
        session,
        current_user=current_user,
    )
