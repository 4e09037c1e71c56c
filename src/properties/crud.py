from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.database.service import DatabaseService
from src.properties.filters import PropertyQuery
from src.properties.models import Property
from src.properties.schemas import PropertyCreate, PropertyUpdate


class PropertyCRUD(DatabaseService[Property, PropertyCreate, PropertyUpdate]):
    """CRUD для объектов недвижимости."""

    async def get_by_listing_id(
        self,
        session: AsyncSession,
        listing_id: str,
    ) -> Property | None:
        """Получает объект по внешнему id объявления."""
        return await self.get_by(session, listing_id=listing_id)

    async def search(
        self,
        session: AsyncSession,
        query: PropertyQuery,
    ) -> tuple[Sequence[Property], int | None]:
        """Выполняет поиск по типизированному запросу.

        Returns:
            Найденные объекты и общее количество совпадений.
            Количество считается только для запроса с пагинацией,
            иначе возвращается None.

        """
        conditions = query.conditions()
        items = await self.get_multi(
            session,
            conditions=conditions,
            order_by=query.order_by(),
            skip=query.offset,
            limit=query.limit,
        )
        if not query.is_paginated:
            return items, None
        total = await self.count(session, conditions=conditions)
        return items, total


property_crud = PropertyCRUD(Property)
