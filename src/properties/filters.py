"""Построение типизированного запроса поиска объектов недвижимости.

Все параметры фильтра приходят строками из query string. Сначала они
разбираются в неизменяемый ``PropertyQuery`` с типизированными полями,
и только затем превращаются в условия SQLAlchemy. Нераспознанные
числовые и булевы значения молча отбрасываются, некорректная дата
``availableFrom`` считается ошибкой запроса.
"""

from dataclasses import dataclass
from datetime import date
import math
from typing import Any, Mapping, Optional

from pydantic import AliasChoices, ConfigDict, Field
from sqlalchemy import String, func
from sqlalchemy.dialects import postgresql
from sqlalchemy.sql.elements import ColumnElement

from src.common.exceptions import BadRequestException
from src.common.schemas import CamelModel
from src.config import LIST_DELIMITER, PROPERTIES_PER_PAGE
from src.properties.models import Property


SORT_PRICE = 'priceLowToHigh'
SORT_RATING = 'rating'
SORT_AREA = 'area'
SORT_ORDER_ASC = 'asc'

SORT_COLUMNS = {
    SORT_PRICE: Property.price,
    SORT_RATING: Property.rating,
    SORT_AREA: Property.area_sq_ft,
}

# Разбиение 'pool | gym|wifi' с обрезкой пробелов вокруг разделителя
_LIST_SPLIT_PATTERN = r'\s*' + '\\' + LIST_DELIMITER + r'\s*'
_TRUE_LITERALS = {'true'}
_FALSE_LITERALS = {'false'}


class PropertyFilterParams(CamelModel):
    """Сырые параметры фильтра из query string.

    Имена параметров в camelCase (``priceFrom``, ``bedRooms`` и т.д.),
    все значения - строки. Неизвестные параметры игнорируются.
    """

    property_types: Optional[str] = None
    states: Optional[str] = None
    cities: Optional[str] = None
    listed_by: Optional[str] = None
    furnished_types: Optional[str] = None
    color_themes: Optional[str] = None
    price_from: Optional[str] = None
    price_to: Optional[str] = None
    area_sq_ft_from: Optional[str] = None
    area_sq_ft_to: Optional[str] = None
    listing_type: Optional[str] = None
    bath_rooms: Optional[str] = None
    bed_rooms: Optional[str] = None
    rating: Optional[str] = None
    title: Optional[str] = None
    is_verified: Optional[str] = None
    tags: Optional[str] = None
    amenities: Optional[str] = None
    available_from: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[str] = Field(
        None,
        validation_alias=AliasChoices('page', 'Page'),
    )

    model_config = ConfigDict(extra='ignore')


def split_list(value: Optional[str]) -> tuple[str, ...]:
    """Разбирает 'a, b,c' в кортеж непустых значений."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(',') if item.strip())


def parse_int(value: Optional[str]) -> Optional[int]:
    """Целое число или None, если значение не распознано."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_float(value: Optional[str]) -> Optional[float]:
    """Конечное число или None, если значение не распознано."""
    if value is None:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_bool(value: Optional[str]) -> Optional[bool]:
    """Булев литерал 'true'/'false' без учёта регистра, иначе None."""
    if value is None:
        return None
    literal = value.strip().lower()
    if literal in _TRUE_LITERALS:
        return True
    if literal in _FALSE_LITERALS:
        return False
    return None


def parse_date(value: Optional[str]) -> Optional[date]:
    """Дата в формате yyyy-MM-dd (допускается полная ISO-дата-время).

    Raises:
        BadRequestException: Значение не является датой.

    """
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError as e:
        raise BadRequestException(
            f'Invalid availableFrom date: {value}',
        ) from e


def parse_page(value: Optional[str]) -> Optional[int]:
    """Номер страницы; нераспознанный или меньше 1 превращается в 1.

    Пустое значение означает запрос без пагинации.
    """
    if value is None or not value.strip():
        return None
    page = parse_int(value)
    if page is None or page < 1:
        return 1
    return page


def split_list_column(column: Any) -> ColumnElement:
    """Массив элементов строки 'a|b|c' с обрезанными пробелами."""
    return func.regexp_split_to_array(
        func.trim(func.coalesce(column, '')),
        _LIST_SPLIT_PATTERN,
        type_=postgresql.ARRAY(String),
    )


@dataclass(frozen=True)
class PropertyQuery:
    """Типизированный запрос поиска объектов недвижимости.

    Attributes:
        property_types: Допустимые типы объектов
        states: Допустимые штаты
        cities: Допустимые города
        listed_by: Допустимые категории продавца
        furnished_types: Допустимые варианты меблировки
        color_themes: Допустимые цветовые темы
        price_from: Нижняя граница цены
        price_to: Верхняя граница цены
        area_from: Нижняя граница площади
        area_to: Верхняя граница площади
        listing_type: Тип объявления (sale/rent)
        bathrooms: Точное число ванных
        bedrooms: Точное число спален
        min_rating: Минимальный рейтинг
        title: Подстрока заголовка
        is_verified: Флаг проверки
        tags: Теги, которые все должны присутствовать
        amenities: Удобства, которые все должны присутствовать
        available_from: Минимальная дата доступности
        sort_by: Поле сортировки
        sort_order: Направление сортировки
        page: Номер страницы или None без пагинации

    """

    property_types: tuple[str, ...] = ()
    states: tuple[str, ...] = ()
    cities: tuple[str, ...] = ()
    listed_by: tuple[str, ...] = ()
    furnished_types: tuple[str, ...] = ()
    color_themes: tuple[str, ...] = ()
    price_from: Optional[float] = None
    price_to: Optional[float] = None
    area_from: Optional[float] = None
    area_to: Optional[float] = None
    listing_type: Optional[str] = None
    bathrooms: Optional[int] = None
    bedrooms: Optional[int] = None
    min_rating: Optional[float] = None
    title: Optional[str] = None
    is_verified: Optional[bool] = None
    tags: tuple[str, ...] = ()
    amenities: tuple[str, ...] = ()
    available_from: Optional[date] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> 'PropertyQuery':
        """Разбирает параметры query string в типизированный запрос.

        Raises:
            BadRequestException: Некорректная дата availableFrom.

        """
        raw = PropertyFilterParams.model_validate(
            {name: str(value) for name, value in params.items()},
        )
        return cls(
            property_types=split_list(raw.property_types),
            states=split_list(raw.states),
            cities=split_list(raw.cities),
            listed_by=split_list(raw.listed_by),
            furnished_types=split_list(raw.furnished_types),
            color_themes=split_list(raw.color_themes),
            price_from=parse_float(raw.price_from),
            price_to=parse_float(raw.price_to),
            area_from=parse_float(raw.area_sq_ft_from),
            area_to=parse_float(raw.area_sq_ft_to),
            listing_type=raw.listing_type or None,
            bathrooms=parse_int(raw.bath_rooms),
            bedrooms=parse_int(raw.bed_rooms),
            min_rating=parse_float(raw.rating),
            title=raw.title or None,
            is_verified=parse_bool(raw.is_verified),
            tags=split_list(raw.tags),
            amenities=split_list(raw.amenities),
            available_from=parse_date(raw.available_from),
            sort_by=raw.sort_by or None,
            sort_order=raw.sort_order or None,
            page=parse_page(raw.page),
        )

    @property
    def is_paginated(self) -> bool:
        """Пагинация включается только при переданном номере страницы."""
        return self.page is not None

    @property
    def offset(self) -> int:
        """Смещение первой записи страницы."""
        if self.page is None:
            return 0
        return (self.page - 1) * PROPERTIES_PER_PAGE

    @property
    def limit(self) -> Optional[int]:
        """Размер страницы или None без пагинации."""
        return PROPERTIES_PER_PAGE if self.is_paginated else None

    def conditions(self) -> list[ColumnElement[bool]]:
        """Условия WHERE, объединяемые через AND."""
        conditions: list[ColumnElement[bool]] = []

        memberships = (
            (Property.type, self.property_types),
            (Property.state, self.states),
            (Property.city, self.cities),
            (Property.listed_by, self.listed_by),
            (Property.furnished, self.furnished_types),
            (Property.color_theme, self.color_themes),
        )
        for column, values in memberships:
            if values:
                conditions.append(column.in_(values))

        if self.price_from is not None:
            conditions.append(Property.price >= self.price_from)
        if self.price_to is not None:
            conditions.append(Property.price <= self.price_to)
        if self.area_from is not None:
            conditions.append(Property.area_sq_ft >= self.area_from)
        if self.area_to is not None:
            conditions.append(Property.area_sq_ft <= self.area_to)

        if self.listing_type is not None:
            conditions.append(Property.listing_type == self.listing_type)
        if self.bathrooms is not None:
            conditions.append(Property.bathrooms == self.bathrooms)
        if self.bedrooms is not None:
            conditions.append(Property.bedrooms == self.bedrooms)
        if self.min_rating is not None:
            conditions.append(Property.rating >= self.min_rating)
        if self.title is not None:
            conditions.append(
                Property.title.icontains(self.title, autoescape=True),
            )
        if self.is_verified is not None:
            conditions.append(Property.is_verified.is_(self.is_verified))

        if self.tags:
            conditions.append(
                split_list_column(Property.tags).contains(list(self.tags)),
            )
        if self.amenities:
            conditions.append(
                split_list_column(Property.amenities).contains(
                    list(self.amenities),
                ),
            )

        if self.available_from is not None:
            conditions.append(Property.available_from >= self.available_from)

        return conditions

    def order_by(self) -> list[Any]:
        """Сортировка; id объявления замыкает порядок для стабильных страниц."""
        column = SORT_COLUMNS.get(self.sort_by or '')
        if column is None:
            primary = Property.available_from.asc()
        elif self.sort_order == SORT_ORDER_ASC:
            primary = column.asc().nulls_last()
        else:
            primary = column.desc().nulls_last()
        return [primary, Property.listing_id.asc()]


def max_pages(total: int) -> int:
    """Количество страниц (деление с округлением вверх)."""
    return math.ceil(total / PROPERTIES_PER_PAGE)
