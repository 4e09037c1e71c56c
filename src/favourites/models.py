from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.config import MAX_LISTING_ID_LENGTH
from src.database.base import Base


class Favourite(Base):
    """Избранный объект пользователя.

    Ограничения:
        - Пара (user_id, property_id) уникальна.
    """

    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('user.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    property_id: Mapped[str] = mapped_column(
        String(MAX_LISTING_ID_LENGTH),
        ForeignKey('property.listing_id', ondelete='CASCADE'),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint(
            'user_id',
            'property_id',
            name='uq_favourite_user_property',
        ),
    )
