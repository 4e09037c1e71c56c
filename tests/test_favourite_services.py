from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from src.cache.keys import key_favourite, key_user_favourites
from src.common.exceptions import ConflictException, NotFoundException
from src.favourites.crud import favourite_crud
from src.favourites.services import favourite_service
from src.properties.crud import property_crud
from tests.factories import make_user


def make_favourite(user_id, property_id='PROP1001'):
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return SimpleNamespace(
        id=uuid.uuid4(),
        user_id=user_id,
        property_id=property_id,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def crud(monkeypatch):  # noqa
    mocks = {
        'exists': AsyncMock(return_value=False),
        'create': AsyncMock(),
        'update': AsyncMock(),
        'delete': AsyncMock(),
        'get_for_user': AsyncMock(return_value=None),
        'list_for_user': AsyncMock(return_value=[]),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(favourite_crud, name, mock)
    monkeypatch.setattr(
        property_crud,
        'exists',
        AsyncMock(return_value=True),
    )
    return mocks


@pytest.mark.asyncio
async def test_add_missing_property(use_cache, crud):
    property_crud.exists.return_value = False

    with pytest.raises(NotFoundException):
        await favourite_service.add(
            None,
            property_id='nope',
            current_user=make_user(),
        )


@pytest.mark.asyncio
async def test_add_duplicate(use_cache, crud):
    crud['exists'].return_value = True

    with pytest.raises(ConflictException):
        await favourite_service.add(
            None,
            property_id='PROP1001',
            current_user=make_user(),
        )
    crud['create'].assert_not_awaited()


@pytest.mark.asyncio
async def test_add_invalidates_user_list(use_cache, crud, redis_client):
    user = make_user()
    await favourite_service.list_favourites(None, current_user=user)
    assert key_user_favourites(user.id) in redis_client.data

    crud['create'].return_value = make_favourite(user.id)
    result = await favourite_service.add(
        None,
        property_id='PROP1001',
        current_user=user,
    )

    assert result['propertyId'] == 'PROP1001'
    assert key_user_favourites(user.id) not in redis_client.data


@pytest.mark.asyncio
async def test_list_is_cached_per_user(use_cache, crud):
    alice, bob = make_user('alice'), make_user('bob')
    crud['list_for_user'].return_value = [make_favourite(alice.id)]

    first = await favourite_service.list_favourites(None, current_user=alice)
    await favourite_service.list_favourites(None, current_user=alice)
    await favourite_service.list_favourites(None, current_user=bob)

    assert first['count'] == 1
    assert crud['list_for_user'].await_count == 2


@pytest.mark.asyncio
async def test_get_other_users_favourite(use_cache, crud):
    with pytest.raises(NotFoundException):
        await favourite_service.get(
            None,
            favourite_id=uuid.uuid4(),
            current_user=make_user(),
        )


@pytest.mark.asyncio
async def test_delete_invalidates_list_and_single(use_cache, crud, redis_client):
    user = make_user()
    favourite = make_favourite(user.id)
    crud['get_for_user'].return_value = favourite
    await favourite_service.get(
        None,
        favourite_id=favourite.id,
        current_user=user,
    )
    await favourite_service.list_favourites(None, current_user=user)

    await favourite_service.remove(
        None,
        favourite_id=favourite.id,
        current_user=user,
    )

    assert key_favourite(user.id, favourite.id) not in redis_client.data
    assert key_user_favourites(user.id) not in redis_client.data
    crud['delete'].assert_awaited_once()


@pytest.mark.asyncio
async def test_update_invalidates_list_and_single(use_cache, crud, redis_client):
    user = make_user()
    favourite = make_favourite(user.id)
    crud['get_for_user'].return_value = favourite
    await favourite_service.get(
        None,
        favourite_id=favourite.id,
        current_user=user,
    )
    await favourite_service.list_favourites(None, current_user=user)
    crud['update'].return_value = make_favourite(user.id, 'PROP2002')

    result = await favourite_service.update(
        None,
        favourite_id=favourite.id,
        property_id='PROP2002',
        current_user=user,
    )

    assert result['propertyId'] == 'PROP2002'
    assert key_favourite(user.id, favourite.id) not in redis_client.data
    assert key_user_favourites(user.id) not in redis_client.data
    crud['update'].assert_awaited_once()


@pytest.mark.asyncio
async def test_update_to_existing_pair(use_cache, crud):
    user = make_user()
    crud['get_for_user'].return_value = make_favourite(user.id)
    crud['update'].side_effect = IntegrityError(
        'UPDATE favourite',
        {},
        Exception('duplicate key'),
    )

    with pytest.raises(ConflictException):
        await favourite_service.update(
            None,
            favourite_id=uuid.uuid4(),
            property_id='PROP2002',
            current_user=user,
        )


@pytest.mark.asyncio
async def test_update_to_missing_property(use_cache, crud):
    user = make_user()
    crud['get_for_user'].return_value = make_favourite(user.id)
    property_crud.exists.return_value = False

    with pytest.raises(NotFoundException):
        await favourite_service.update(
            None,
            favourite_id=uuid.uuid4(),
            property_id='nope',
            current_user=user,
        )
    crud['update'].assert_not_awaited()
