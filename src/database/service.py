"""Базовый сервисный слой для работы с БД."""

from typing import Any, Generic, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import and_, exists, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from src.database.base import Base


ModelType = TypeVar('ModelType', bound=Base)
CreateSchemaType = TypeVar('CreateSchemaType', bound=BaseModel)
UpdateSchemaType = TypeVar('UpdateSchemaType', bound=BaseModel)


class DatabaseService(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """Базовый сервис для операций с БД.

    Предоставляет стандартные CRUD операции для всех моделей. Каждая
    операция записи атомарна в пределах одной строки; многострочных
    транзакций сервис не открывает.

    Args:
        model: SQLAlchemy модель для выполнения операций

    Example:
        class FavouriteCRUD(
            DatabaseService[Favourite, FavouriteCreate, FavouriteUpdate],
        ):
            pass

        favourite_crud = FavouriteCRUD(Favourite)

    """

    def __init__(self, model: Type[ModelType]) -> None:
        """Инициализирует сервис с указанной моделью."""
        self.model = model

    async def get(
        self,
        session: AsyncSession,
        *,
        id: Any,
    ) -> ModelType | None:
        """Получает объект по внутреннему ID.

        Args:
            session: Асинхронная сессия БД
            id: Идентификатор объекта

        Returns:
            Объект модели или None если не найден

        """
        result = await session.execute(
            select(self.model).where(self.model.id == id),
        )
        return result.scalars().first()

    async def get_by(
        self,
        session: AsyncSession,
        **filters: Any,
    ) -> ModelType | None:
        """Получает первый объект, подходящий под фильтры (поле=значение)."""
        conditions = self._build_filter_conditions(**filters)
        result = await session.execute(
            select(self.model).where(and_(*conditions)),
        )
        return result.scalars().first()

    async def get_multi(
        self,
        session: AsyncSession,
        *,
        conditions: Sequence[ColumnElement[bool]] = (),
        order_by: Sequence[Any] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> Sequence[ModelType]:
        """Получает список объектов с фильтрацией, сортировкой и пагинацией.

        Args:
            session: Асинхронная сессия БД
            conditions: SQLAlchemy условия, объединяемые через AND
            order_by: Выражения сортировки
            skip: Количество пропускаемых записей
            limit: Максимальное количество записей (None - без ограничения)

        Returns:
            Последовательность объектов модели

        """
        stmt = select(self.model).where(*conditions).order_by(*order_by)
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def create(
        self,
        session: AsyncSession,
        *,
        obj_in: CreateSchemaType | dict[str, Any],
        commit: bool = True,
    ) -> ModelType:
        """Создает новый объект.

        Args:
            session: Асинхронная сессия БД
            obj_in: Схема или словарь с данными для создания
            commit: Выполнять ли commit сразу

        Returns:
            Созданный объект модели

        """
        obj_in_data = (
            obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        )
        db_obj = self.model(**obj_in_data)
        session.add(db_obj)

        if commit:
            await self._commit(session)
            await session.refresh(db_obj)

        return db_obj

    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | dict[str, Any],
        commit: bool = True,
    ) -> ModelType:
        """Обновляет существующий объект.

        Args:
            session: Асинхронная сессия БД
            db_obj: Объект для обновления
            obj_in: Схема или словарь с данными для обновления
            commit: Выполнять ли commit сразу

        Returns:
            Обновленный объект модели

        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        session.add(db_obj)

        if commit:
            await self._commit(session)
            await session.refresh(db_obj)

        return db_obj

    async def delete(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        commit: bool = True,
    ) -> ModelType:
        """Удаляет объект.

        Args:
            session: Асинхронная сессия БД
            db_obj: Объект для удаления
            commit: Выполнять ли commit сразу

        Returns:
            Удаленный объект

        """
        await session.delete(db_obj)

        if commit:
            await self._commit(session)

        return db_obj

    async def exists(
        self,
        session: AsyncSession,
        **filters: Any,
    ) -> bool:
        """Проверяет существование записи по фильтрам.

        Example:
            exists = await service.exists(
                session=session,
                email='user@example.com',
            )

        """
        conditions = self._build_filter_conditions(**filters)
        stmt = select(exists().where(and_(*conditions)))
        result = await session.execute(stmt)
        return bool(result.scalar())

    async def count(
        self,
        session: AsyncSession,
        *,
        conditions: Sequence[ColumnElement[bool]] = (),
    ) -> int:
        """Подсчитывает количество записей, подходящих под условия."""
        stmt = select(func.count()).select_from(self.model).where(*conditions)
        result = await session.execute(stmt)
        return int(result.scalar() or 0)

    async def _commit(self, session: AsyncSession) -> None:
        """Фиксирует транзакцию, откатывая её при ошибке БД."""
        try:
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise

    def _build_filter_conditions(
        self,
        **filters: Any,
    ) -> list[ColumnElement[bool]]:
        """Строит список условий для фильтрации (поле=значение).

        Неизвестные поля модели игнорируются.
        """
        conditions = []

        for key, value in filters.items():
            if not hasattr(self.model, key):
                continue

            field = getattr(self.model, key)

            if isinstance(value, list):
                conditions.append(field.in_(value))
            elif isinstance(value, bool):
                conditions.append(field.is_(value))
            elif value is None:
                conditions.append(field.is_(None))
            else:
                conditions.append(field == value)

        return conditions
