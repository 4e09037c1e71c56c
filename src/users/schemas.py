from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, EmailStr, Field

from src.common.schemas import CamelModel
from src.config import (
    MAX_NAME_LENGTH,
    MAX_PASSWORD_LENGTH,
    MIN_PASSWORD_LENGTH,
)


def normalize_email(value: str) -> str:
    """Приводит email к нижнему регистру."""
    return value.strip().lower()


NormalizedEmail = Annotated[EmailStr, AfterValidator(normalize_email)]

PasswordStr = Annotated[
    str,
    Field(
        min_length=MIN_PASSWORD_LENGTH,
        max_length=MAX_PASSWORD_LENGTH,
        description=f'Пароль: минимум {MIN_PASSWORD_LENGTH} символов',
        examples=['secret_123'],
    ),
]


class UserCreate(CamelModel):
    """Схема регистрации пользователя."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: NormalizedEmail
    password: PasswordStr


class UserLogin(CamelModel):
    """Схема входа пользователя."""

    email: NormalizedEmail
    password: str = Field(..., min_length=1)


class UserShort(CamelModel):
    """Публичные данные пользователя."""

    id: UUID
    name: str
    email: str


class RecipientShort(CamelModel):
    """Получатель рекомендации без идентификатора."""

    name: str
    email: str


class AuthResponse(CamelModel):
    """Ответ на регистрацию и вход."""

    message: str
    user: UserShort
    access_token: str
    refresh_token: str


class RefreshResponse(CamelModel):
    """Ответ на обновление access токена."""

    message: str
    access_token: str
    user: UserShort


class UserSearchResponse(CamelModel):
    """Результат поиска пользователей по email."""

    users: list[UserShort]
