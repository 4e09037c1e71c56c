"""Исключения слоя кэширования."""


class CacheError(Exception):
    """Ошибка обращения к Redis.

    Никогда не пробрасывается в обработчики запросов: клиент кэша
    возвращает её внутри ``CacheResult``, а оркестраторы продолжают
    работу напрямую с БД.
    """
