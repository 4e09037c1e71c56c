from typing import Sequence
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import USER_SEARCH_LIMIT
from src.database.service import DatabaseService
from src.users.models import User
from src.users.schemas import UserCreate
from src.users.security import get_password_hash


class UserCRUD(DatabaseService[User, UserCreate, BaseModel]):
    """CRUD для модели User."""

    async def create_user(
        self,
        session: AsyncSession,
        *,
        obj_in: UserCreate,
    ) -> User:
        """Создает пользователя с хешированным паролем."""
        data = obj_in.model_dump(exclude={'password'})
        data['hashed_password'] = get_password_hash(obj_in.password)
        return await self.create(session, obj_in=data)

    async def get_by_email(
        self,
        session: AsyncSession,
        email: str,
    ) -> User | None:
        """Получает пользователя по email без учёта регистра."""
        return await self.get_by(session, email=email.lower())

    async def search_by_email(
        self,
        session: AsyncSession,
        term: str,
        *,
        limit: int = USER_SEARCH_LIMIT,
    ) -> Sequence[User]:
        """Поиск пользователей по подстроке email без учёта регистра."""
        stmt = (
            select(User)
            .where(User.email.icontains(term, autoescape=True))
            .order_by(User.email)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_many(
        self,
        session: AsyncSession,
        ids: set[UUID],
    ) -> dict[UUID, User]:
        """Возвращает пользователей по набору id."""
        if not ids:
            return {}
        result = await session.execute(select(User).where(User.id.in_(ids)))
        return {user.id: user for user in result.scalars().all()}


user_crud = UserCRUD(User)
