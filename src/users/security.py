from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pwdlib import PasswordHash

from src.config import settings


ACCESS_TOKEN_TYPE = 'access'
REFRESH_TOKEN_TYPE = 'refresh'
ALGORITHM = settings.auth.ALGORITHM
password_hash = PasswordHash.recommended()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Верификация пароля."""
    return password_hash.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Хеширование пароля."""
    return password_hash.hash(password)


def _create_token(
    data: dict[str, Any],
    secret: str,
    expires_delta: timedelta,
    token_type: str,
) -> str:
    """Создание JWT токена заданного типа."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({'exp': expire, 'type': token_type})
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Создание access токена."""
    return _create_token(
        data,
        settings.auth.ACCESS_TOKEN_SECRET,
        expires_delta
        or timedelta(minutes=settings.auth.ACCESS_TOKEN_EXPIRE_MINUTES),
        ACCESS_TOKEN_TYPE,
    )


def create_refresh_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Создание refresh токена."""
    return _create_token(
        data,
        settings.auth.REFRESH_TOKEN_SECRET,
        expires_delta
        or timedelta(minutes=settings.auth.REFRESH_TOKEN_EXPIRE_MINUTES),
        REFRESH_TOKEN_TYPE,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """Декодирует access токен.

    Raises:
        jwt.PyJWTError: Токен просрочен, подделан или другого типа.

    """
    payload = jwt.decode(
        token,
        settings.auth.ACCESS_TOKEN_SECRET,
        algorithms=[ALGORITHM],
    )
    if payload.get('type') != ACCESS_TOKEN_TYPE:
        raise jwt.InvalidTokenError('Wrong token type')
    return payload


def decode_refresh_token(token: str) -> dict[str, Any]:
    """Декодирует refresh токен.

    Raises:
        jwt.ExpiredSignatureError: Срок действия истёк.
        jwt.PyJWTError: Токен подделан или другого типа.

    """
    payload = jwt.decode(
        token,
        settings.auth.REFRESH_TOKEN_SECRET,
        algorithms=[ALGORITHM],
    )
    if payload.get('type') != REFRESH_TOKEN_TYPE:
        raise jwt.InvalidTokenError('Wrong token type')
    return payload


def create_token_pair(user: Any) -> tuple[str, str]:
    """Создаёт пару access/refresh токенов для пользователя."""
    data = {'sub': str(user.id), 'email': user.email}
    return create_access_token(data), create_refresh_token(data)
