from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock
import uuid

import pytest

from src.cache.keys import key_recommendations
from src.common.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
)
from src.recommendations.crud import recommendation_crud
from src.recommendations.schemas import RecommendationCreate
from src.recommendations.services import recommendation_service
from src.users.crud import user_crud
from tests.factories import make_user


@pytest.fixture
def crud(monkeypatch):  # noqa
    mocks = {
        'exists': AsyncMock(return_value=False),
        'create': AsyncMock(),
        'list_for_user': AsyncMock(return_value=[]),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(recommendation_crud, name, mock)
    users = {
        'get_by_email': AsyncMock(return_value=None),
        'search_by_email': AsyncMock(return_value=[]),
        'get_many': AsyncMock(return_value={}),
    }
    for name, mock in users.items():
        monkeypatch.setattr(user_crud, name, mock)
    mocks.update(users)
    return mocks


@pytest.mark.asyncio
async def test_self_recommendation_rejected(use_cache, crud):
    alice = make_user('alice')

    with pytest.raises(BadRequestException):
        await recommendation_service.recommend(
            None,
            obj_in=RecommendationCreate(
                email='ALICE@example.com',
                featureId='PROP1001',
            ),
            current_user=alice,
        )

    crud['create'].assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_feature_id_rejected(use_cache, crud):
    with pytest.raises(BadRequestException):
        await recommendation_service.recommend(
            None,
            obj_in=RecommendationCreate(email='bob@example.com'),
            current_user=make_user(),
        )


@pytest.mark.asyncio
async def test_blank_feature_id_rejected(use_cache, crud):
    with pytest.raises(BadRequestException):
        await recommendation_service.recommend(
            None,
            obj_in=RecommendationCreate(
                email='bob@example.com',
                featureId='   ',
            ),
            current_user=make_user(),
        )
    crud['create'].assert_not_awaited()


@pytest.mark.asyncio
async def test_feature_id_is_stripped_before_store(use_cache, crud):
    bob = make_user('bob')
    crud['get_by_email'].return_value = bob
    crud['create'].return_value = SimpleNamespace(id=uuid.uuid4())

    await recommendation_service.recommend(
        None,
        obj_in=RecommendationCreate(
            email='bob@example.com',
            featureId='  PROP1001 ',
        ),
        current_user=make_user('alice'),
    )

    assert crud['exists'].await_args.kwargs['feature_id'] == 'PROP1001'
    assert crud['create'].await_args.kwargs['obj_in']['feature_id'] == (
        'PROP1001'
    )


@pytest.mark.asyncio
async def test_unknown_recipient(use_cache, crud):
    with pytest.raises(NotFoundException):
        await recommendation_service.recommend(
            None,
            obj_in=RecommendationCreate(
                email='ghost@example.com',
                featureId='PROP1001',
            ),
            current_user=make_user(),
        )


@pytest.mark.asyncio
async def test_duplicate_recommendation(use_cache, crud):
    crud['get_by_email'].return_value = make_user('bob')
    crud['exists'].return_value = True

    with pytest.raises(ConflictException):
        await recommendation_service.recommend(
            None,
            obj_in=RecommendationCreate(
                email='bob@example.com',
                featureId='PROP1001',
            ),
            current_user=make_user(),
        )


@pytest.mark.asyncio
async def test_recommend_invalidates_both_users(use_cache, crud, redis_client):
    alice, bob = make_user('alice'), make_user('bob')
    await recommendation_service.list_recommendations(None, current_user=alice)
    await recommendation_service.list_recommendations(None, current_user=bob)
    crud['get_by_email'].return_value = bob
    crud['create'].return_value = SimpleNamespace(id=uuid.uuid4())

    result = await recommendation_service.recommend(
        None,
        obj_in=RecommendationCreate(
            email='Bob@Example.com',
            featureId='PROP1001',
        ),
        current_user=alice,
    )

    assert result['recommendedTo'] == {
        'name': 'bob',
        'email': 'bob@example.com',
    }
    assert crud['create'].await_args.kwargs['obj_in']['status'] == 'pending'
    assert key_recommendations(alice.id) not in redis_client.data
    assert key_recommendations(bob.id) not in redis_client.data


@pytest.mark.asyncio
async def test_list_splits_received_and_sent(use_cache, crud):
    alice, bob = make_user('alice'), make_user('bob')
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    crud['list_for_user'].return_value = [
        SimpleNamespace(
            id=uuid.uuid4(),
            user_id=bob.id,
            recommended_to_user_id=alice.id,
            feature_id='P1',
            status='pending',
            created_at=now,
        ),
        SimpleNamespace(
            id=uuid.uuid4(),
            user_id=alice.id,
            recommended_to_user_id=bob.id,
            feature_id='P2',
            status='pending',
            created_at=now,
        ),
    ]
    crud['get_many'].return_value = {bob.id: bob}

    result = await recommendation_service.list_recommendations(
        None,
        current_user=alice,
    )

    assert result['totalReceived'] == 1
    assert result['totalSent'] == 1
    assert result['received'][0]['recommendedBy']['email'] == bob.email
    assert result['sent'][0]['recommendedTo']['name'] == 'bob'
    assert result['sent'][0]['type'] == 'sent'


@pytest.mark.asyncio
async def test_search_users_requires_term(use_cache, crud):
    with pytest.raises(BadRequestException):
        await recommendation_service.search_users(None, search_email='  ')


@pytest.mark.asyncio
async def test_search_users_cached_by_lowercase_term(use_cache, crud):
    crud['search_by_email'].return_value = [make_user('bob')]

    first = await recommendation_service.search_users(None, search_email='BOB')
    second = await recommendation_service.search_users(None, search_email='bob')

    assert first == second
    assert first['users'][0]['email'] == 'bob@example.com'
    crud['search_by_email'].assert_awaited_once()
