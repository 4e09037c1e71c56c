"""Read-through кэширование для эндпоинтов чтения."""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from src.cache.client import RedisCache, cache
from src.config import settings


logger = logging.getLogger('app.cache')
T = TypeVar('T')


async def read_through(
    key: str,
    loader: Callable[[], Awaitable[T]],
    *,
    ttl: int = settings.cache.TTL_DEFAULT,
    cache_client: Optional[RedisCache] = None,
) -> T | Any:
    """Возвращает значение из кэша или загружает и кэширует его.

    Попадание в кэш возвращается сразу. При промахе вызывается loader,
    его результат сохраняется с заданным TTL. Ошибки Redis на любом шаге
    только логируются: запрос продолжает работу напрямую с БД.
    Исключения loader (например, NotFoundException) пробрасываются,
    и ничего не кэшируется.

    Args:
        key: Ключ кэша.
        loader: Асинхронная загрузка JSON-safe данных из БД.
        ttl: Время жизни записи в секундах.
        cache_client: Клиент кэша (по умолчанию общий singleton).

    Returns:
        Данные из кэша или результат loader.

    """
    client = cache_client or cache

    cached = await client.get(key)
    if not cached.ok:
        logger.warning(
            'Кэш недоступен, читаем из БД: %s',
            key,
            extra={'user': 'SYSTEM'},
        )
    elif cached.value is not None:
        return cached.value

    value = await loader()
    if value is None:
        return value

    stored = await client.set(key, value, ttl=ttl)
    if not stored.ok:
        logger.warning(
            'Не удалось сохранить в кэш %s, ответ отдан без кэша',
            key,
            extra={'user': 'SYSTEM'},
        )
    return value
