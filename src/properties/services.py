from typing import Any, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cache import (
    key_properties_filtered,
    key_property,
    property_targets,
    read_through,
    write_invalidate,
)
from src.common.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
)
from src.common.logging import log_action
from src.config import settings
from src.properties.crud import property_crud
from src.properties.filters import PropertyQuery, max_pages
from src.properties.models import Property
from src.properties.schemas import (
    FilteredPropertiesResponse,
    PropertyCreate,
    PropertyInfo,
    PropertyUpdate,
)
from src.users.models import User


def serialize_property(db_obj: Property) -> dict[str, Any]:
    """JSON-safe представление объекта для ответа и кэша."""
    return PropertyInfo.model_validate(db_obj).model_dump(
        mode='json',
        by_alias=True,
    )


class PropertyService:
    """Сервис объектов недвижимости с кэшированием чтения."""

    @log_action('Фильтрованный поиск объектов', only_errors=True)
    async def search(
        self,
        session: AsyncSession,
        *,
        params: Mapping[str, str],
    ) -> dict[str, Any]:
        """Поиск объектов по фильтрам с read-through кэшем.

        Параметры разбираются до обращения к кэшу, поэтому ошибка
        разбора не затрагивает ни кэш, ни БД. Ключ кэша строится по
        всему набору параметров независимо от их порядка.
        """
        query = PropertyQuery.from_params(params)

        async def load() -> dict[str, Any]:
            items, total = await property_crud.search(session, query)
            if total is not None:
                pages = max_pages(total)
            else:
                pages = None if items else 0
            return FilteredPropertiesResponse(
                properties=[PropertyInfo.model_validate(i) for i in items],
                max_paginated_pages=pages,
            ).model_dump(mode='json', by_alias=True)

        return await read_through(
            key_properties_filtered(params),
            load,
            ttl=settings.cache.TTL_PROPERTIES_FILTERED,
        )

    async def get_property(
        self,
        session: AsyncSession,
        *,
        listing_id: str,
    ) -> dict[str, Any]:
        """Получение объекта по id объявления через кэш.

        Raises:
            NotFoundException: Объект не найден (в кэш не попадает).

        """

        async def load() -> dict[str, Any]:
            db_obj = await property_crud.get_by_listing_id(session, listing_id)
            if db_obj is None:
                raise NotFoundException('Property not found')
            return serialize_property(db_obj)

        return await read_through(
            key_property(listing_id),
            load,
            ttl=settings.cache.TTL_PROPERTY_BY_ID,
        )

    @log_action('Создание объекта недвижимости')
    async def create_property(
        self,
        session: AsyncSession,
        *,
        obj_in: PropertyCreate,
        current_user: User,
    ) -> dict[str, Any]:
        """Создает объект от имени текущего пользователя.

        Raises:
            ConflictException: Объект с таким id уже существует.

        """
        if await property_crud.exists(session, listing_id=obj_in.id):
            raise ConflictException('Property with this ID already exists')

        data = obj_in.to_record()
        data['created_by'] = current_user.id
        data['is_verified'] = False

        try:
            db_obj = await write_invalidate(
                lambda: property_crud.create(session, obj_in=data),
                entity_name='property',
                entity_id=obj_in.id,
                **property_targets(obj_in.id),
            )
        except IntegrityError as e:
            raise ConflictException(
                'Property with this ID already exists',
            ) from e
        return serialize_property(db_obj)

    @log_action('Обновление объекта недвижимости')
    async def update_property(
        self,
        session: AsyncSession,
        *,
        listing_id: str,
        obj_in: PropertyUpdate,
        current_user: User,
    ) -> dict[str, Any]:
        """Частично обновляет объект. Доступно только создателю."""
        db_obj = await self._get_owned(session, listing_id, current_user)

        updated = await write_invalidate(
            lambda: property_crud.update(
                session,
                db_obj=db_obj,
                obj_in=obj_in.to_record(),
            ),
            entity_name='property',
            entity_id=listing_id,
            **property_targets(listing_id),
        )
        return serialize_property(updated)

    @log_action('Удаление объекта недвижимости')
    async def delete_property(
        self,
        session: AsyncSession,
        *,
        listing_id: str,
        current_user: User,
    ) -> None:
        """Удаляет объект. Доступно только создателю."""
        db_obj = await self._get_owned(session, listing_id, current_user)

        await write_invalidate(
            lambda: property_crud.delete(session, db_obj=db_obj),
            entity_name='property',
            entity_id=listing_id,
            **property_targets(listing_id),
        )

    async def _get_owned(
        self,
        session: AsyncSession,
        listing_id: str,
        current_user: User,
    ) -> Property:
        """Объект, принадлежащий текущему пользователю.

        Raises:
            NotFoundException: Объект не найден.
            ForbiddenException: Пользователь не является создателем.

        """
        db_obj = await property_crud.get_by_listing_id(session, listing_id)
        if db_obj is None:
            raise NotFoundException('Property not found')
        if db_obj.created_by != current_user.id:
            raise ForbiddenException(
                'Only the creator can modify this property',
            )
        return db_obj


property_service = PropertyService()
