from uuid import UUID

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cache import invalidate, user_search_targets
from src.common.exceptions import (
    ConflictException,
    ForbiddenException,
    NotAuthorizedException,
)
from src.common.logging import log_action
from src.users.crud import user_crud
from src.users.models import User
from src.users.schemas import (
    AuthResponse,
    RefreshResponse,
    UserCreate,
    UserLogin,
    UserShort,
)
from src.users.security import (
    create_access_token,
    create_token_pair,
    decode_refresh_token,
    verify_password,
)


class AuthService:
    """Регистрация, вход и обновление токенов."""

    @log_action('Регистрация пользователя')
    async def signup(
        self,
        session: AsyncSession,
        *,
        user_in: UserCreate,
    ) -> AuthResponse:
        """Создает пользователя и выдает пару токенов.

        Raises:
            ConflictException: Email уже зарегистрирован.

        """
        if await user_crud.exists(session, email=user_in.email):
            raise ConflictException('User already exists')

        try:
            user = await user_crud.create_user(session, obj_in=user_in)
        except IntegrityError as e:
            raise ConflictException('User already exists') from e

        # Новый пользователь должен попадать в поиск сразу
        await invalidate(**user_search_targets(), entity_name='users')

        return self._auth_response('User registered successfully', user)

    @log_action('Вход пользователя')
    async def login(
        self,
        session: AsyncSession,
        *,
        credentials: UserLogin,
    ) -> AuthResponse:
        """Проверяет email и пароль и выдает пару токенов."""
        user = await user_crud.get_by_email(session, credentials.email)
        if user is None or not verify_password(
            credentials.password,
            user.hashed_password,
        ):
            raise NotAuthorizedException('Invalid email or password')

        return self._auth_response('Login successful', user)

    @log_action('Обновление access токена', only_errors=True)
    async def refresh(
        self,
        session: AsyncSession,
        *,
        refresh_token: str | None,
    ) -> RefreshResponse:
        """Выдает новый access токен по refresh токену.

        Raises:
            NotAuthorizedException: Токен отсутствует или просрочен.
            ForbiddenException: Токен недействителен или пользователь
                удалён.

        """
        if not refresh_token:
            raise NotAuthorizedException('Refresh token is missing')

        try:
            payload = decode_refresh_token(refresh_token)
            user_id = UUID(str(payload.get('sub')))
        except jwt.ExpiredSignatureError as e:
            raise NotAuthorizedException('Refresh token expired') from e
        except (jwt.PyJWTError, ValueError) as e:
            raise ForbiddenException('Invalid refresh token') from e

        user = await user_crud.get(session, id=user_id)
        if user is None:
            raise ForbiddenException('Invalid refresh token')

        return RefreshResponse(
            message='Token refreshed successfully',
            access_token=create_access_token(
                {'sub': str(user.id), 'email': user.email},
            ),
            user=UserShort.model_validate(user),
        )

    @staticmethod
    def _auth_response(message: str, user: User) -> AuthResponse:
        access_token, refresh_token = create_token_pair(user)
        return AuthResponse(
            message=message,
            user=UserShort.model_validate(user),
            access_token=access_token,
            refresh_token=refresh_token,
        )


auth_service = AuthService()
