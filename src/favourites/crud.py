from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.database.service import DatabaseService
from src.favourites.models import Favourite
from src.favourites.schemas import FavouriteUpdate


class FavouriteCRUD(DatabaseService[Favourite, FavouriteUpdate, FavouriteUpdate]):
    """CRUD для избранного."""

    async def get_for_user(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        favourite_id: UUID,
    ) -> Favourite | None:
        """Запись избранного, принадлежащая пользователю."""
        return await self.get_by(session, id=favourite_id, user_id=user_id)

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> Sequence[Favourite]:
        """Избранное пользователя, новые первыми."""
        return await self.get_multi(
            session,
            conditions=[Favourite.user_id == user_id],
            order_by=[Favourite.created_at.desc()],
        )


favourite_crud = FavouriteCRUD(Favourite)
