from datetime import datetime
from uuid import UUID

from pydantic import Field

from src.common.schemas import CamelModel
from src.config import MAX_LISTING_ID_LENGTH


class FavouriteUpdate(CamelModel):
    """Перенос записи избранного на другой объект."""

    property_id: str = Field(
        ...,
        min_length=1,
        max_length=MAX_LISTING_ID_LENGTH,
    )


class FavouriteInfo(CamelModel):
    """Запись избранного."""

    id: UUID
    user_id: UUID
    property_id: str
    created_at: datetime
    updated_at: datetime


class FavouriteList(CamelModel):
    """Список избранного пользователя."""

    count: int
    favourites: list[FavouriteInfo]


class FavouriteResponse(CamelModel):
    """Ответ с одной записью избранного."""

    message: str
    favourite: FavouriteInfo


class FavouriteListResponse(FavouriteList):
    """Ответ со списком избранного."""

    message: str
