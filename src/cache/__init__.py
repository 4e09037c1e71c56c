"""Redis cache module.

Основные компоненты:
    - RedisCache: асинхронный клиент, все операции возвращают CacheResult
    - read_through: чтение через кэш с заполнением при промахе
    - write_invalidate / invalidate: сброс кэша после записи
    - Генераторы ключей: key_property, key_properties_filtered, etc.

"""

from src.cache.client import CacheResult, RedisCache, cache
from src.cache.exceptions import CacheError
from src.cache.invalidation import (
    favourite_targets,
    invalidate,
    property_targets,
    recommendation_targets,
    user_search_targets,
    write_invalidate,
)
from src.cache.keys import (
    fingerprint,
    key_favourite,
    key_properties_filtered,
    key_property,
    key_recommendations,
    key_user_favourites,
    key_user_search,
    pattern_all_properties,
    pattern_all_user_searches,
)
from src.cache.reader import read_through


__all__ = [
    # Client
    'CacheError',
    'CacheResult',
    'RedisCache',
    'cache',
    # Orchestration
    'read_through',
    'invalidate',
    'write_invalidate',
    'property_targets',
    'favourite_targets',
    'recommendation_targets',
    'user_search_targets',
    # Keys
    'fingerprint',
    'key_properties_filtered',
    'key_property',
    'key_user_favourites',
    'key_favourite',
    'key_recommendations',
    'key_user_search',
    'pattern_all_properties',
    'pattern_all_user_searches',
]
