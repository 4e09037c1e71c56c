from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cache import (
    favourite_targets,
    key_favourite,
    key_user_favourites,
    read_through,
    write_invalidate,
)
from src.common.exceptions import ConflictException, NotFoundException
from src.common.logging import log_action
from src.config import settings
from src.favourites.crud import favourite_crud
from src.favourites.models import Favourite
from src.favourites.schemas import FavouriteInfo, FavouriteList
from src.properties.crud import property_crud
from src.users.models import User


ALREADY_FAVOURITE = 'Property already in favourites'


def serialize_favourite(db_obj: Favourite) -> dict[str, Any]:
    """JSON-safe представление записи избранного."""
    return FavouriteInfo.model_validate(db_obj).model_dump(
        mode='json',
        by_alias=True,
    )


class FavouriteService:
    """Избранное пользователя. Все ключи кэша в области пользователя."""

    @log_action('Добавление в избранное')
    async def add(
        self,
        session: AsyncSession,
        *,
        property_id: str,
        current_user: User,
    ) -> dict[str, Any]:
        """Добавляет объект в избранное.

        Raises:
            NotFoundException: Объект не существует.
            ConflictException: Объект уже в избранном.

        """
        await self._check_property(session, property_id)
        if await favourite_crud.exists(
            session,
            user_id=current_user.id,
            property_id=property_id,
        ):
            raise ConflictException(ALREADY_FAVOURITE)

        try:
            db_obj = await write_invalidate(
                lambda: favourite_crud.create(
                    session,
                    obj_in={
                        'user_id': current_user.id,
                        'property_id': property_id,
                    },
                ),
                entity_name='favourites',
                entity_id=current_user.id,
                **favourite_targets(current_user.id),
            )
        except IntegrityError as e:
            raise ConflictException(ALREADY_FAVOURITE) from e
        return serialize_favourite(db_obj)

    async def list_favourites(
        self,
        session: AsyncSession,
        *,
        current_user: User,
    ) -> dict[str, Any]:
        """Избранное пользователя через кэш."""

        async def load() -> dict[str, Any]:
            items = await favourite_crud.list_for_user(session, current_user.id)
            return FavouriteList(
                count=len(items),
                favourites=[FavouriteInfo.model_validate(i) for i in items],
            ).model_dump(mode='json', by_alias=True)

        return await read_through(
            key_user_favourites(current_user.id),
            load,
            ttl=settings.cache.TTL_FAVOURITES_LIST,
        )

    async def get(
        self,
        session: AsyncSession,
        *,
        favourite_id: UUID,
        current_user: User,
    ) -> dict[str, Any]:
        """Запись избранного текущего пользователя через кэш."""

        async def load() -> dict[str, Any]:
            db_obj = await self._get_own(session, favourite_id, current_user)
            return serialize_favourite(db_obj)

        return await read_through(
            key_favourite(current_user.id, favourite_id),
            load,
            ttl=settings.cache.TTL_FAVOURITE_BY_ID,
        )

    @log_action('Изменение записи избранного')
    async def update(
        self,
        session: AsyncSession,
        *,
        favourite_id: UUID,
        property_id: str,
        current_user: User,
    ) -> dict[str, Any]:
        """Переносит запись избранного на другой объект.

        Raises:
            NotFoundException: Запись или объект не найдены.
            ConflictException: Новый объект уже в избранном.

        """
        db_obj = await self._get_own(session, favourite_id, current_user)
        await self._check_property(session, property_id)

        try:
            updated = await write_invalidate(
                lambda: favourite_crud.update(
                    session,
                    db_obj=db_obj,
                    obj_in={'property_id': property_id},
                ),
                entity_name='favourites',
                entity_id=current_user.id,
                **favourite_targets(current_user.id, favourite_id),
            )
        except IntegrityError as e:
            raise ConflictException(ALREADY_FAVOURITE) from e
        return serialize_favourite(updated)

    @log_action('Удаление из избранного')
    async def remove(
        self,
        session: AsyncSession,
        *,
        favourite_id: UUID,
        current_user: User,
    ) -> None:
        """Удаляет запись избранного текущего пользователя."""
        db_obj = await self._get_own(session, favourite_id, current_user)
        await write_invalidate(
            lambda: favourite_crud.delete(session, db_obj=db_obj),
            entity_name='favourites',
            entity_id=current_user.id,
            **favourite_targets(current_user.id, favourite_id),
        )

    async def _get_own(
        self,
        session: AsyncSession,
        favourite_id: UUID,
        current_user: User,
    ) -> Favourite:
        db_obj = await favourite_crud.get_for_user(
            session,
            user_id=current_user.id,
            favourite_id=favourite_id,
        )
        if db_obj is None:
            raise NotFoundException('Favourite not found')
        return db_obj

    async def _check_property(
        self,
        session: AsyncSession,
        property_id: str,
    ) -> None:
        if not await property_crud.exists(session, listing_id=property_id):
            raise NotFoundException('Property not found')


favourite_service = FavouriteService()
