"""Модуль генерации ключей для Redis кэша.

Все ключи имеют entity-like формат для удобства и читаемости:
- Объекты: 'property:<id>'
- Вложенные по владельцу: 'favourite:<user_id>:<favourite_id>'
- Списки: 'favourites:user:<user_id>', 'recommendations:<user_id>'
- Фильтрованные выборки: 'properties:filtered:<fingerprint>'

Шаблоны ('...*') понимает Redis SCAN MATCH и используются
для массовой инвалидации.
"""

import base64
from typing import Any, Mapping
from urllib.parse import quote
from uuid import UUID


PREFIX_PROPERTY = 'property'
PREFIX_PROPERTIES = 'properties'
PREFIX_FAVOURITE = 'favourite'
PREFIX_FAVOURITES = 'favourites'
PREFIX_RECOMMENDATIONS = 'recommendations'
PREFIX_USER_SEARCH = 'search_users'

PAIR_SEPARATOR = ':'
PAIRS_DELIMITER = '|'


def _build_key(*parts: Any) -> str:
    """Универсальный построитель ключей.

    None-значения игнорируются.

    Example:
        >>> _build_key('favourite', user_id, favourite_id)
        'favourite:<user_id>:<favourite_id>'

    """
    return ':'.join(str(part) for part in parts if part is not None)


def fingerprint(params: Mapping[str, Any]) -> str:
    """Детерминированный отпечаток набора параметров.

    Имена параметров сортируются, пары 'name:value' склеиваются через
    '|', результат кодируется в URL-safe base64. Имена и значения
    предварительно экранируются, поэтому разделители внутри значений
    не приводят к коллизиям. Порядок вставки в mapping не влияет
    на результат.

    Example:
        >>> fingerprint({'cities': 'Pune', 'priceTo': '5000'})
        '<base64 of "cities:Pune|priceTo:5000">'

    """
    joined = PAIRS_DELIMITER.join(
        f'{quote(str(name), safe="")}{PAIR_SEPARATOR}'
        f'{quote(str(params[name]), safe="")}'
        for name in sorted(params)
    )
    return base64.urlsafe_b64encode(joined.encode()).decode()


def key_properties_filtered(params: Mapping[str, Any]) -> str:
    """Ключ для результата фильтрованного поиска объектов.

    Example:
        >>> key_properties_filtered({'cities': 'Pune'})
        'properties:filtered:<base64 of "cities:Pune">'

    """
    return _build_key(PREFIX_PROPERTIES, 'filtered', fingerprint(params))


def pattern_all_properties() -> str:
    """Шаблон для всех списочных кэшей объектов ('properties:*')."""
    return f'{PREFIX_PROPERTIES}:*'


def key_property(listing_id: str) -> str:
    """Ключ для одного объекта недвижимости.

    Example:
        >>> key_property('P-101')
        'property:P-101'

    """
    return _build_key(PREFIX_PROPERTY, listing_id)


def key_user_favourites(user_id: UUID) -> str:
    """Ключ для списка избранного пользователя.

    Example:
        >>> key_user_favourites(UUID('123e4567-...'))
        'favourites:user:123e4567-...'

    """
    return _build_key(PREFIX_FAVOURITES, 'user', user_id)


def key_favourite(user_id: UUID, favourite_id: UUID) -> str:
    """Ключ для одной записи избранного в области пользователя."""
    return _build_key(PREFIX_FAVOURITE, user_id, favourite_id)


def key_recommendations(user_id: UUID) -> str:
    """Ключ для отправленных и полученных рекомендаций пользователя."""
    return _build_key(PREFIX_RECOMMENDATIONS, user_id)


def key_user_search(search_email: str) -> str:
    """Ключ для результата поиска пользователей по email.

    Example:
        >>> key_user_search('Alice@')
        'search_users:alice@'

    """
    return _build_key(PREFIX_USER_SEARCH, search_email.lower())


def pattern_all_user_searches() -> str:
    """Шаблон для всех результатов поиска пользователей."""
    return f'{PREFIX_USER_SEARCH}:*'
