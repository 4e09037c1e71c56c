from typing import Any

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.schemas import MessageResponse
from src.database.sessions import get_async_session
from src.properties.responses import (
    CREATE_RESPONSES,
    DELETE_RESPONSES,
    GET_BY_ID_RESPONSES,
    SEARCH_RESPONSES,
    UPDATE_RESPONSES,
)
from src.properties.schemas import (
    FilteredPropertiesResponse,
    PropertyCreate,
    PropertyDataResponse,
    PropertyUpdate,
    PropertyWriteResponse,
)
from src.properties.services import property_service
from src.users.dependencies import get_current_user
from src.users.models import User


router = APIRouter()


@router.get(
    '/',
    response_model=FilteredPropertiesResponse,
    summary='Фильтрованный поиск объектов',
    description=(
        'Параметры: propertyTypes, states, cities, listedBy, '
        'furnishedTypes, colorThemes (через запятую), priceFrom, priceTo, '
        'areaSqFtFrom, areaSqFtTo, listingType, bathRooms, bedRooms, '
        'rating, title, isVerified, tags, amenities, availableFrom, '
        'sortBy (priceLowToHigh, rating, area), sortOrder (asc, desc), '
        'page. Без page возвращается вся выборка.'
    ),
    responses=SEARCH_RESPONSES,
)
async def search_properties(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Фильтрованный поиск объектов недвижимости."""
    return await property_service.search(
        session,
        params=dict(request.query_params),
    )


@router.post(
    '/',
    response_model=PropertyWriteResponse,
    status_code=status.HTTP_201_CREATED,
    summary='Создание объекта недвижимости',
    responses=CREATE_RESPONSES,
)
async def create_property(
    property_in: PropertyCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Создание объекта. Создатель - текущий пользователь."""
    data = await property_service.create_property(
        session,
        obj_in=property_in,
        current_user=current_user,
    )
    return {'message': 'Property created successfully', 'data': data}


@router.get(
    '/{property_id}',
    response_model=PropertyDataResponse,
    summary='Получение объекта по id',
    responses=GET_BY_ID_RESPONSES,
)
async def get_property(
    property_id: str,
    session: AsyncSession = Depends(get_async_session),
) -> Any:
    """Получение объекта по id объявления. Доступно без авторизации."""
    data = await property_service.get_property(
        session,
        listing_id=property_id,
    )
    return {'data': data}


@router.put(
    '/{property_id}',
    response_model=PropertyWriteResponse,
    summary='Обновление объекта',
    responses=UPDATE_RESPONSES,
)
async def update_property(
    property_id: str,
    property_in: PropertyUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Частичное обновление объекта.

    **Доступ:**
    - создатель объекта
    """
    data = await property_service.update_property(
        session,
        listing_id=property_id,
        obj_in=property_in,
        current_user=current_user,
    )
    return {'message': 'Property updated successfully', 'data': data}


@router.delete(
    '/{property_id}',
    response_model=MessageResponse,
    summary='Удаление объекта',
    responses=DELETE_RESPONSES,
)
async def delete_property(
    property_id: str,
    session: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Удаление объекта.

    **Доступ:**
    - создатель объекта
    """
    await property_service.delete_property(
        session,
        listing_id=property_id,
        current_user=current_user,
    )
    return MessageResponse(message='Property deleted successfully')
