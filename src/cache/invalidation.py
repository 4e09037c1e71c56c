"""Write-invalidate: сброс кэша после успешной записи в БД.

Политика намеренно грубая: после любой успешной записи удаляются
точный ключ сущности и все списочные ключи её типа. Ошибки Redis
логируются и не влияют на результат записи.
"""

import logging
from typing import Awaitable, Callable, Iterable, Optional, Sequence, TypeVar
from uuid import UUID

from src.cache.client import RedisCache, cache
from src.cache.keys import (
    key_favourite,
    key_property,
    key_recommendations,
    key_user_favourites,
    pattern_all_properties,
    pattern_all_user_searches,
)


logger = logging.getLogger('app.cache')
T = TypeVar('T')


async def invalidate(
    *,
    keys: Iterable[str] = (),
    patterns: Iterable[str] = (),
    entity_name: str = 'cache',
    entity_id: Optional[str | UUID] = None,
    cache_client: Optional[RedisCache] = None,
) -> int:
    """Удаляет точные ключи и все ключи по шаблонам.

    Args:
        keys: Точные ключи для удаления
        patterns: Шаблоны для массового удаления
        entity_name: Имя сущности для логирования
        entity_id: ID сущности для логирования
        cache_client: Клиент кэша (по умолчанию общий singleton)

    Returns:
        Количество удалённых ключей

    """
    client = cache_client or cache
    deleted = 0
    failed = False

    keys = list(keys)
    if keys:
        result = await client.delete_many(*keys)
        deleted += result.value
        failed = failed or not result.ok

    for pattern in patterns:
        result = await client.delete_pattern(pattern)
        deleted += result.value
        failed = failed or not result.ok

    log_msg = f'Инвалидирован кэш {entity_name}'
    if entity_id:
        log_msg += f' {entity_id}'
    log_msg += f': {deleted} ключей'

    if failed:
        logger.error(
            log_msg + ' (часть ключей не удалена, Redis недоступен)',
            extra={'user': 'SYSTEM'},
        )
    else:
        logger.info(log_msg, extra={'user': 'SYSTEM'})
    return deleted


async def write_invalidate(
    write: Callable[[], Awaitable[T]],
    *,
    keys: Sequence[str] = (),
    patterns: Sequence[str] = (),
    entity_name: str = 'cache',
    entity_id: Optional[str | UUID] = None,
    cache_client: Optional[RedisCache] = None,
) -> T:
    """Выполняет запись в БД, затем безусловно сбрасывает кэш.

    Если запись упала, кэш не трогается и исключение пробрасывается.
    """
    result = await write()
    await invalidate(
        keys=keys,
        patterns=patterns,
        entity_name=entity_name,
        entity_id=entity_id,
        cache_client=cache_client,
    )
    return result


def property_targets(listing_id: str) -> dict[str, list[str]]:
    """Ключи и шаблоны, которые сбрасывает любая запись объекта."""
    return {
        'keys': [key_property(listing_id)],
        'patterns': [pattern_all_properties()],
    }


def favourite_targets(
    user_id: UUID,
    favourite_id: Optional[UUID] = None,
) -> dict[str, list[str]]:
    """Ключи избранного в области одного пользователя."""
    keys = [key_user_favourites(user_id)]
    if favourite_id is not None:
        keys.append(key_favourite(user_id, favourite_id))
    return {'keys': keys, 'patterns': []}


def recommendation_targets(*user_ids: UUID) -> dict[str, list[str]]:
    """Ключи рекомендаций для каждого затронутого пользователя."""
    return {
        'keys': [key_recommendations(user_id) for user_id in user_ids],
        'patterns': [],
    }


def user_search_targets() -> dict[str, list[str]]:
    """Шаблон для результатов поиска пользователей."""
    return {'keys': [], 'patterns': [pattern_all_user_searches()]}
