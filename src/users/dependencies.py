from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError
from sqlalchemy.ext.asyncio import AsyncSession

from src.common.exceptions import NotAuthorizedException
from src.database.sessions import get_async_session
from src.users.crud import user_crud
from src.users.models import User
from src.users.security import decode_access_token


security = HTTPBearer(auto_error=False)


async def get_current_user(
    session: AsyncSession = Depends(get_async_session),
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User:
    """Возвращает пользователя по access токену из заголовка Authorization.

    Raises:
        NotAuthorizedException: Токен отсутствует, недействителен
            или пользователь не найден.

    """
    if not credentials:
        raise NotAuthorizedException('Access token is missing')

    try:
        payload = decode_access_token(credentials.credentials)
        user_id = UUID(str(payload.get('sub')))
    except (PyJWTError, ValueError) as e:
        raise NotAuthorizedException('Invalid or expired token') from e

    user = await user_crud.get(session, id=user_id)
    if user is None:
        raise NotAuthorizedException('User not found')
    return user
