from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.responses import (
    LOGIN_RESPONSES,
    REFRESH_RESPONSES,
    SIGNUP_RESPONSES,
)
from src.auth.services import auth_service
from src.database.sessions import get_async_session
from src.users.dependencies import security
from src.users.schemas import (
    AuthResponse,
    RefreshResponse,
    UserCreate,
    UserLogin,
)


router = APIRouter()


@router.post(
    '/signup',
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary='Регистрация пользователя',
    description='Создает пользователя и возвращает пару токенов.',
    responses=SIGNUP_RESPONSES,
)
async def signup(
    user_in: UserCreate,
    session: AsyncSession = Depends(get_async_session),
) -> AuthResponse:
    """Регистрация нового пользователя."""
    return await auth_service.signup(session, user_in=user_in)


@router.post(
    '/login',
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary='Получение токенов авторизации',
    description='Возвращает access и refresh токены пользователя.',
    responses=LOGIN_RESPONSES,
)
async def login(
    credentials: UserLogin,
    session: AsyncSession = Depends(get_async_session),
) -> AuthResponse:
    """Вход по email и паролю."""
    return await auth_service.login(session, credentials=credentials)


@router.post(
    '/refresh-token',
    response_model=RefreshResponse,
    status_code=status.HTTP_200_OK,
    summary='Обновление access токена',
    description=(
        'Принимает refresh токен в заголовке Authorization: Bearer '
        'и возвращает новый access токен.'
    ),
    responses=REFRESH_RESPONSES,
)
async def refresh_token(
    session: AsyncSession = Depends(get_async_session),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> RefreshResponse:
    """Обновление access токена."""
    token = credentials.credentials if credentials else None
    return await auth_service.refresh(session, refresh_token=token)
