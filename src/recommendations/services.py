from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cache import (
    key_recommendations,
    key_user_search,
    read_through,
    recommendation_targets,
    write_invalidate,
)
from src.common.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
)
from src.common.logging import log_action
from src.config import RECOMMENDATION_STATUS_PENDING, settings
from src.recommendations.crud import recommendation_crud
from src.recommendations.schemas import (
    ReceivedRecommendation,
    RecommendationCreate,
    RecommendationCreated,
    RecommendationsResponse,
    SentRecommendation,
)
from src.users.crud import user_crud
from src.users.models import User
from src.users.schemas import (
    RecipientShort,
    UserSearchResponse,
    UserShort,
)


ALREADY_RECOMMENDED = (
    'You have already recommended this property to this user'
)


def _short(user: Optional[User]) -> Optional[UserShort]:
    return UserShort.model_validate(user) if user is not None else None


class RecommendationService:
    """Поиск получателей и рекомендации объектов между пользователями."""

    async def search_users(
        self,
        session: AsyncSession,
        *,
        search_email: Optional[str],
    ) -> dict[str, Any]:
        """Поиск пользователей по подстроке email через кэш.

        Raises:
            BadRequestException: Строка поиска не передана.

        """
        term = (search_email or '').strip()
        if not term:
            raise BadRequestException('Search word is required')

        async def load() -> dict[str, Any]:
            users = await user_crud.search_by_email(session, term)
            return UserSearchResponse(
                users=[UserShort.model_validate(u) for u in users],
            ).model_dump(mode='json', by_alias=True)

        return await read_through(
            key_user_search(term),
            load,
            ttl=settings.cache.TTL_USER_SEARCH,
        )

    @log_action('Рекомендация объекта пользователю')
    async def recommend(
        self,
        session: AsyncSession,
        *,
        obj_in: RecommendationCreate,
        current_user: User,
    ) -> dict[str, Any]:
        """Создает рекомендацию в статусе pending.

        Raises:
            BadRequestException: Не переданы email или featureId,
                либо рекомендация самому себе.
            NotFoundException: Получатель не найден.
            ConflictException: Такая рекомендация уже есть.

        """
        if not obj_in.email or not obj_in.feature_id:
            raise BadRequestException('Email and featureId are required')

        if obj_in.email == current_user.email.lower():
            raise BadRequestException(
                'You cannot recommend a property to yourself',
            )

        recipient = await user_crud.get_by_email(session, obj_in.email)
        if recipient is None:
            raise NotFoundException('User not found with this email')

        if await recommendation_crud.exists(
            session,
            user_id=current_user.id,
            recommended_to_user_id=recipient.id,
            feature_id=obj_in.feature_id,
        ):
            raise ConflictException(ALREADY_RECOMMENDED)

        try:
            db_obj = await write_invalidate(
                lambda: recommendation_crud.create(
                    session,
                    obj_in={
                        'user_id': current_user.id,
                        'recommended_to_user_id': recipient.id,
                        'feature_id': obj_in.feature_id,
                        'status': RECOMMENDATION_STATUS_PENDING,
                    },
                ),
                entity_name='recommendations',
                entity_id=current_user.id,
                **recommendation_targets(current_user.id, recipient.id),
            )
        except IntegrityError as e:
            raise ConflictException(ALREADY_RECOMMENDED) from e

        return RecommendationCreated(
            recommendation_id=db_obj.id,
            recommended_to=RecipientShort.model_validate(recipient),
        ).model_dump(mode='json', by_alias=True)

    async def list_recommendations(
        self,
        session: AsyncSession,
        *,
        current_user: User,
    ) -> dict[str, Any]:
        """Полученные и отправленные рекомендации через кэш."""

        async def load() -> dict[str, Any]:
            return await self._load_recommendations(session, current_user.id)

        return await read_through(
            key_recommendations(current_user.id),
            load,
            ttl=settings.cache.TTL_RECOMMENDATIONS,
        )

    async def _load_recommendations(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> dict[str, Any]:
        items = await recommendation_crud.list_for_user(session, user_id)
        counterparties = await user_crud.get_many(
            session,
            {
                item.user_id
                if item.recommended_to_user_id == user_id
                else item.recommended_to_user_id
                for item in items
            },
        )

        received, sent = [], []
        for item in items:
            if item.recommended_to_user_id == user_id:
                received.append(
                    ReceivedRecommendation(
                        id=item.id,
                        feature_id=item.feature_id,
                        recommended_by=_short(
                            counterparties.get(item.user_id),
                        ),
                        created_at=item.created_at,
                        status=item.status,
                    ),
                )
            else:
                sent.append(
                    SentRecommendation(
                        id=item.id,
                        feature_id=item.feature_id,
                        recommended_to=_short(
                            counterparties.get(item.recommended_to_user_id),
                        ),
                        created_at=item.created_at,
                        status=item.status,
                    ),
                )

        return RecommendationsResponse(
            message='Recommendations retrieved successfully',
            received=received,
            sent=sent,
            total_received=len(received),
            total_sent=len(sent),
        ).model_dump(mode='json', by_alias=True)


recommendation_service = RecommendationService()
