from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.config import (
    DEFAULT_COLOR_THEME,
    MAX_COLOR_THEME_LENGTH,
    MAX_LIST_FIELD_LENGTH,
    MAX_LISTING_ID_LENGTH,
    MAX_NAME_LENGTH,
    MAX_TITLE_LENGTH,
)
from src.database.base import Base


class Property(Base):
    """Модель объекта недвижимости.

    Внешний идентификатор объявления хранится в ``listing_id`` и
    отдаётся в API как ``id``; первичный ключ ``id`` остаётся внутренним.
    Теги и удобства хранятся строкой через '|'.

    Ограничения:
        - Уникальность listing_id на уровне БД.
        - Индексы под основные сочетания фильтров поиска.
    """

    listing_id: Mapped[str] = mapped_column(
        String(MAX_LISTING_ID_LENGTH),
        unique=True,
        nullable=False,
    )
    title: Mapped[str] = mapped_column(
        String(MAX_TITLE_LENGTH),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        index=True,
    )
    price: Mapped[float] = mapped_column(
        Numeric(14, 2, asdecimal=False),
        nullable=False,
        index=True,
    )
    state: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        index=True,
    )
    city: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        index=True,
    )
    area_sq_ft: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        index=True,
    )
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    amenities: Mapped[Optional[str]] = mapped_column(
        String(MAX_LIST_FIELD_LENGTH),
        nullable=True,
    )
    furnished: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        index=True,
    )
    available_from: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )
    listed_by: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        index=True,
    )
    tags: Mapped[Optional[str]] = mapped_column(
        String(MAX_LIST_FIELD_LENGTH),
        nullable=True,
    )
    color_theme: Mapped[str] = mapped_column(
        String(MAX_COLOR_THEME_LENGTH),
        nullable=False,
        default=DEFAULT_COLOR_THEME,
    )
    rating: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        index=True,
    )
    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )
    listing_type: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        index=True,
    )
    created_by: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('user.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        Index('ix_property_listing_city_price', 'listing_type', 'city', 'price'),
        Index('ix_property_type_rooms', 'type', 'bedrooms', 'bathrooms'),
        Index('ix_property_state_city', 'state', 'city'),
    )
