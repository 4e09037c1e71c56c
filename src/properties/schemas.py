from datetime import date, datetime
import re
from typing import Annotated, Any, Literal, Optional
from uuid import UUID

from pydantic import AliasChoices, BeforeValidator, Field

from src.common.schemas import CamelModel
from src.config import (
    DEFAULT_COLOR_THEME,
    LIST_DELIMITER,
    MAX_COLOR_THEME_LENGTH,
    MAX_LIST_FIELD_LENGTH,
    MAX_LISTING_ID_LENGTH,
    MAX_NAME_LENGTH,
    MAX_RATING,
    MAX_TITLE_LENGTH,
    MIN_RATING,
)


PropertyTypeStr = Literal['Apartment', 'Villa', 'Bungalow', 'Plot', 'Studio']
FurnishedStr = Literal['Furnished', 'Semi', 'Unfurnished']
ListedByStr = Literal['Owner', 'Agent', 'Builder']
ListingTypeStr = Literal['sale', 'rent']


def coerce_listing_id(value: Any) -> Any:
    """Числовой id объявления приводится к строке."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


def to_pipe_list(value: Any) -> Optional[str]:
    """Приводит список или строку через запятую к формату 'a|b|c'.

    Example:
        >>> to_pipe_list('pool, gym,wifi')
        'pool|gym|wifi'

    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        items = re.split(r'[,|]', str(value))
    cleaned = [item.strip() for item in items if item.strip()]
    return LIST_DELIMITER.join(cleaned) or None


ListingId = Annotated[
    str,
    BeforeValidator(coerce_listing_id),
    Field(min_length=1, max_length=MAX_LISTING_ID_LENGTH, examples=['PROP1001']),
]

PipeList = Annotated[
    Optional[Annotated[str, Field(max_length=MAX_LIST_FIELD_LENGTH)]],
    BeforeValidator(to_pipe_list),
    Field(
        description='Значения через запятую, хранятся через "|"',
        examples=['pool,gym,wifi'],
    ),
]

Price = Annotated[float, Field(gt=0)]
Area = Annotated[float, Field(gt=0)]
Rooms = Annotated[int, Field(ge=0)]
Rating = Annotated[float, Field(ge=MIN_RATING, le=MAX_RATING)]
Name = Annotated[str, Field(min_length=1, max_length=MAX_NAME_LENGTH)]
Title = Annotated[str, Field(min_length=1, max_length=MAX_TITLE_LENGTH)]
ColorTheme = Annotated[str, Field(max_length=MAX_COLOR_THEME_LENGTH)]


class PropertyCreate(CamelModel):
    """Создание объекта недвижимости."""

    id: ListingId
    title: Title
    type: PropertyTypeStr
    price: Price
    state: Name
    city: Name
    area_sq_ft: Area
    bedrooms: Rooms
    bathrooms: Rooms
    amenities: PipeList = None
    furnished: FurnishedStr
    available_from: date
    listed_by: ListedByStr
    tags: PipeList = None
    color_theme: ColorTheme = DEFAULT_COLOR_THEME
    rating: Optional[Rating] = None
    listing_type: ListingTypeStr

    def to_record(self) -> dict[str, Any]:
        """Данные для записи в БД: только заданные поля, id -> listing_id."""
        data = self.model_dump(exclude_none=True)
        data['listing_id'] = data.pop('id')
        return data


class PropertyUpdate(CamelModel):
    """Частичное обновление объекта.

    Поля id и createdBy не обновляются и игнорируются.
    """

    title: Optional[Title] = None
    type: Optional[PropertyTypeStr] = None
    price: Optional[Price] = None
    state: Optional[Name] = None
    city: Optional[Name] = None
    area_sq_ft: Optional[Area] = None
    bedrooms: Optional[Rooms] = None
    bathrooms: Optional[Rooms] = None
    amenities: PipeList = None
    furnished: Optional[FurnishedStr] = None
    available_from: Optional[date] = None
    listed_by: Optional[ListedByStr] = None
    tags: PipeList = None
    color_theme: Optional[ColorTheme] = None
    rating: Optional[Rating] = None
    listing_type: Optional[ListingTypeStr] = None

    def to_record(self) -> dict[str, Any]:
        """Только переданные и непустые поля."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PropertyInfo(CamelModel):
    """Полная информация об объекте."""

    id: str = Field(
        validation_alias=AliasChoices('listing_id', 'id'),
        serialization_alias='id',
    )
    title: str
    type: str
    price: float
    state: str
    city: str
    area_sq_ft: float
    bedrooms: int
    bathrooms: int
    amenities: Optional[str] = None
    furnished: str
    available_from: date
    listed_by: str
    tags: Optional[str] = None
    color_theme: str
    rating: Optional[float] = None
    is_verified: bool
    listing_type: str
    created_by: UUID
    created_at: datetime
    updated_at: datetime


class FilteredPropertiesResponse(CamelModel):
    """Результат фильтрованного поиска.

    ``maxPaginatedPages`` равен null для выборки без пагинации
    и 0, если ничего не найдено.
    """

    properties: list[PropertyInfo]
    max_paginated_pages: Optional[int]


class PropertyDataResponse(CamelModel):
    """Ответ с одним объектом."""

    data: PropertyInfo


class PropertyWriteResponse(PropertyDataResponse):
    """Ответ на создание или обновление объекта."""

    message: str
