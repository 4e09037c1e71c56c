import functools
import inspect
from typing import Any, Callable

from src.common.logging.config import logger


def format_user(user_obj: Any) -> str:
    """Форматирует пользователя для поля ``user`` в логах.

    Args:
        user_obj: Объект пользователя или None

    Returns:
        Строка вида 'name(id)' либо 'SYSTEM'

    """
    if user_obj is not None and hasattr(user_obj, 'id'):
        name = getattr(user_obj, 'name', None) or 'USER'
        return f'{name}({user_obj.id})'
    return 'SYSTEM'


def _extract_user(kwargs: dict[str, Any]) -> str:
    """Извлекает и форматирует пользователя из kwargs."""
    return format_user(kwargs.get('current_user'))


def _extract_params(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Обрабатывает параметры, исключая чувствительные и ненужные ключи.

    Args:
        kwargs: Аргументы функции

    Returns:
        Отфильтрованные параметры

    """
    exclude_keys = {'current_user', 'session', 'credentials'}
    sensitive_fields = {'password', 'token', 'secret'}

    params = {}

    for k, v in kwargs.items():
        if k in exclude_keys:
            continue

        if hasattr(v, 'model_dump'):
            model_dict = v.model_dump(exclude_none=True)
            params[k] = {
                field: '[FILTERED]' if field in sensitive_fields else value
                for field, value in model_dict.items()
            }
        elif k in sensitive_fields:
            params[k] = '[FILTERED]'
        else:
            params[k] = v

    return params


def _log_start(action: str, user: str, params: dict[str, Any]) -> None:
    """Логирует запуск процесса."""
    msg = f'Запуск 🚀 {action}' + (f' | параметры: {params}' if params else '')
    logger.info(msg, extra={'user': user})


def _log_success(action: str, user: str) -> None:
    """Логирует успешное завершение процесса."""
    logger.info(f'Успешно ✅ {action}', extra={'user': user})


def _log_error(action: str, user: str, error: Exception) -> None:
    """Логирует неуспешное завершение процесса."""
    logger.error(
        f'Неудача ❌ {action} | {error!r}',
        extra={'user': user},
    )


def log_action(
    action: str,
    skip_logging: bool = False,
    only_errors: bool = False,
) -> Callable:
    """Декоратор для логирования процессов.

    Используется для логирования операций в service layer. Пользователь
    берётся из именованного аргумента ``current_user``.

    Args:
        action: Описание действия для лога
        skip_logging: Пропустить логирование старта и успеха
        only_errors: Логировать только ошибки

    Returns:
        Декоратор функции

    Example:
        @log_action('Создание объекта недвижимости')
        async def create_property(
            self,
            session: AsyncSession,
            *,
            obj_in: PropertyCreate,
            current_user: User,
        ) -> dict:
            ...

    """

    def wrapper(func: Callable) -> Callable:
        """Возвращает асинхронную или синхронную обертку."""
        is_async = inspect.iscoroutinefunction(func)
        quiet = skip_logging or only_errors

        @functools.wraps(func)
        async def async_inner(*args: Any, **kwargs: Any) -> Any:
            user = _extract_user(kwargs)
            if not quiet:
                _log_start(action, user, _extract_params(kwargs))
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                _log_error(action, user, e)
                raise
            if not quiet:
                _log_success(action, user)
            return result

        @functools.wraps(func)
        def sync_inner(*args: Any, **kwargs: Any) -> Any:
            user = _extract_user(kwargs)
            if not quiet:
                _log_start(action, user, _extract_params(kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _log_error(action, user, e)
                raise
            if not quiet:
                _log_success(action, user)
            return result

        return async_inner if is_async else sync_inner

    return wrapper
