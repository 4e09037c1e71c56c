from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import StringConstraints

from src.common.schemas import CamelModel
from src.config import MAX_FEATURE_ID_LENGTH
from src.users.schemas import NormalizedEmail, RecipientShort, UserShort


class RecommendationCreate(CamelModel):
    """Рекомендация объекта пользователю по email."""

    email: Optional[NormalizedEmail] = None
    feature_id: Optional[
        Annotated[
            str,
            StringConstraints(
                strip_whitespace=True,
                max_length=MAX_FEATURE_ID_LENGTH,
            ),
        ]
    ] = None


class RecommendationCreated(CamelModel):
    """Ответ на создание рекомендации."""

    recommendation_id: UUID
    recommended_to: RecipientShort


class ReceivedRecommendation(CamelModel):
    """Полученная рекомендация."""

    id: UUID
    feature_id: str
    recommended_by: Optional[UserShort]
    created_at: datetime
    status: str
    type: Literal['received'] = 'received'


class SentRecommendation(CamelModel):
    """Отправленная рекомендация."""

    id: UUID
    feature_id: str
    recommended_to: Optional[UserShort]
    created_at: datetime
    status: str
    type: Literal['sent'] = 'sent'


class RecommendationsResponse(CamelModel):
    """Полученные и отправленные рекомендации пользователя."""

    message: str
    received: list[ReceivedRecommendation]
    sent: list[SentRecommendation]
    total_received: int
    total_sent: int
