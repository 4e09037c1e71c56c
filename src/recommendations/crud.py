from typing import Sequence
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.service import DatabaseService
from src.recommendations.models import Recommendation
from src.recommendations.schemas import RecommendationCreate


class RecommendationCRUD(
    DatabaseService[Recommendation, RecommendationCreate, BaseModel],
):
    """CRUD для рекомендаций."""

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> Sequence[Recommendation]:
        """Отправленные и полученные рекомендации, новые первыми."""
        return await self.get_multi(
            session,
            conditions=[
                or_(
                    Recommendation.user_id == user_id,
                    Recommendation.recommended_to_user_id == user_id,
                ),
            ],
            order_by=[Recommendation.created_at.desc()],
        )


recommendation_crud = RecommendationCRUD(Recommendation)
