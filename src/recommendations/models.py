from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.config import (
    MAX_FEATURE_ID_LENGTH,
    MAX_NAME_LENGTH,
    RECOMMENDATION_STATUS_PENDING,
)
from src.database.base import Base


class Recommendation(Base):
    """Рекомендация объекта от одного пользователя другому.

    Ограничения:
        - Тройка (user_id, recommended_to_user_id, feature_id) уникальна.
    """

    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('user.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    recommended_to_user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('user.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    feature_id: Mapped[str] = mapped_column(
        String(MAX_FEATURE_ID_LENGTH),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
        default=RECOMMENDATION_STATUS_PENDING,
    )

    __table_args__ = (
        UniqueConstraint(
            'user_id',
            'recommended_to_user_id',
            'feature_id',
            name='uq_recommendation_triple',
        ),
    )
