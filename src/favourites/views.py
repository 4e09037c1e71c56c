from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.schemas import MessageResponse
from src.database.sessions import get_async_session
from src.favourites.responses import (
    CREATE_RESPONSES,
    DELETE_RESPONSES,
    GET_BY_ID_RESPONSES,
    LIST_RESPONSES,
    UPDATE_RESPONSES,
)
from src.favourites.schemas import (
    FavouriteListResponse,
    FavouriteResponse,
    FavouriteUpdate,
)
from src.favourites.services import favourite_service
from src.users.dependencies import get_current_user
from src.users.models import User


router = APIRouter()


@router.post(
    '/{property_id}',
    response_model=FavouriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary='Добавление объекта в избранное',
    responses=CREATE_RESPONSES,
)
async def add_favourite(
    property_id: str,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Добавление объекта в избранное текущего пользователя."""
    favourite = await favourite_service.add(
        session,
        property_id=property_id,
        current_user=current_user,
    )
    return {
        'message': 'Added to favourites successfully',
        'favourite': favourite,
    }


@router.get(
    '/',
    response_model=FavouriteListResponse,
    summary='Список избранного',
    responses=LIST_RESPONSES,
)
async def list_favourites(
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Избранное текущего пользователя, новые первыми."""
    data = await favourite_service.list_favourites(session, current_user=current_user)
    return {'message': 'Favourites retrieved successfully', **data}


@router.get(
    '/{favourite_id}',
    response_model=FavouriteResponse,
    summary='Получение записи избранного',
    responses=GET_BY_ID_RESPONSES,
)
async def get_favourite(
    favourite_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Запись избранного текущего пользователя."""
    favourite = await favourite_service.get(
        session,
        favourite_id=favourite_id,
        current_user=current_user,
    )
    return {
        'message': 'Favourite retrieved successfully',
        'favourite': favourite,
    }


@router.put(
    '/{favourite_id}',
    response_model=FavouriteResponse,
    summary='Изменение записи избранного',
    responses=UPDATE_RESPONSES,
)
async def update_favourite(
    favourite_id: UUID,
    favourite_in: FavouriteUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Перенос записи избранного на другой объект."""
    favourite = await favourite_service.update(
        session,
        favourite_id=favourite_id,
        property_id=favourite_in.property_id,
        current_user=current_user,
    )
    return {
        'message': 'Favourite updated successfully',
        'favourite': favourite,
    }


@router.delete(
    '/{favourite_id}',
    response_model=MessageResponse,
    summary='Удаление из избранного',
    responses=DELETE_RESPONSES,
)
async def delete_favourite(
    favourite_id: UUID,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Удаление записи избранного текущего пользователя."""
    await favourite_service.remove(
        session,
        favourite_id=favourite_id,
        current_user=current_user,
    )
    return MessageResponse(message='Favourite removed successfully')
