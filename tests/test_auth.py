from datetime import timedelta
from unittest.mock import AsyncMock

import jwt
import pytest

from src.auth.services import auth_service
from src.cache.keys import key_user_search
from src.common.exceptions import (
    ConflictException,
    ForbiddenException,
    NotAuthorizedException,
)
from src.users.crud import user_crud
from src.users.schemas import UserCreate, UserLogin
from src.users.security import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    get_password_hash,
)
from tests.factories import make_user


@pytest.fixture
def users(monkeypatch):  # noqa
    mocks = {
        'exists': AsyncMock(return_value=False),
        'create_user': AsyncMock(),
        'get_by_email': AsyncMock(return_value=None),
        'get': AsyncMock(return_value=None),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(user_crud, name, mock)
    return mocks


def test_access_token_round_trip():
    token = create_access_token({'sub': 'user-1'})

    assert decode_access_token(token)['sub'] == 'user-1'


def test_tokens_are_not_interchangeable():
    access = create_access_token({'sub': 'user-1'})
    refresh = create_refresh_token({'sub': 'user-1'})

    with pytest.raises(jwt.PyJWTError):
        decode_refresh_token(access)
    with pytest.raises(jwt.PyJWTError):
        decode_access_token(refresh)


def test_signup_schema_normalizes_email():
    user_in = UserCreate(name='Alice', email='Alice@Example.com', password='secret_123')

    assert user_in.email == 'alice@example.com'


def test_signup_schema_rejects_short_password():
    with pytest.raises(ValueError):
        UserCreate(name='Alice', email='alice@example.com', password='short')


@pytest.mark.asyncio
async def test_signup_existing_email(use_cache, users):
    users['exists'].return_value = True

    with pytest.raises(ConflictException):
        await auth_service.signup(
            None,
            user_in=UserCreate(
                name='Alice',
                email='alice@example.com',
                password='secret_123',
            ),
        )


@pytest.mark.asyncio
async def test_signup_returns_tokens_and_sweeps_search(
    use_cache,
    users,
    redis_client,
):
    await use_cache.set(key_user_search('ali'), {'users': []})
    user = make_user('alice')
    users['create_user'].return_value = user

    response = await auth_service.signup(
        None,
        user_in=UserCreate(
            name='alice',
            email='alice@example.com',
            password='secret_123',
        ),
    )

    assert response.user.id == user.id
    assert decode_access_token(response.access_token)['sub'] == str(user.id)
    assert decode_refresh_token(response.refresh_token)['sub'] == str(user.id)
    assert redis_client.data == {}


@pytest.mark.asyncio
async def test_login_wrong_password(users):
    users['get_by_email'].return_value = make_user(
        hashed_password=get_password_hash('secret_123'),
    )

    with pytest.raises(NotAuthorizedException):
        await auth_service.login(
            None,
            credentials=UserLogin(email='alice@example.com', password='wrong'),
        )


@pytest.mark.asyncio
async def test_login_success(users):
    user = make_user(hashed_password=get_password_hash('secret_123'))
    users['get_by_email'].return_value = user

    response = await auth_service.login(
        None,
        credentials=UserLogin(email='alice@example.com', password='secret_123'),
    )

    assert response.user.email == user.email
    assert response.message == 'Login successful'


@pytest.mark.asyncio
async def test_refresh_missing_token(users):
    with pytest.raises(NotAuthorizedException):
        await auth_service.refresh(None, refresh_token=None)


@pytest.mark.asyncio
async def test_refresh_expired_token(users):
    token = create_refresh_token(
        {'sub': str(make_user().id)},
        expires_delta=timedelta(seconds=-10),
    )

    with pytest.raises(NotAuthorizedException):
        await auth_service.refresh(None, refresh_token=token)


@pytest.mark.asyncio
async def test_refresh_invalid_token(users):
    with pytest.raises(ForbiddenException):
        await auth_service.refresh(None, refresh_token='garbage')


@pytest.mark.asyncio
async def test_refresh_deleted_user(users):
    token = create_refresh_token({'sub': str(make_user().id)})

    with pytest.raises(ForbiddenException):
        await auth_service.refresh(None, refresh_token=token)


@pytest.mark.asyncio
async def test_refresh_issues_access_token(users):
    user = make_user()
    users['get'].return_value = user

    response = await auth_service.refresh(
        None,
        refresh_token=create_refresh_token({'sub': str(user.id)}),
    )

    assert decode_access_token(response.access_token)['sub'] == str(user.id)
    assert response.user.id == user.id
