import asyncio
from dataclasses import dataclass
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

import orjson
from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from src.cache.exceptions import CacheError
from src.config import settings


logger = logging.getLogger('app.cache')
T = TypeVar('T')

SYSTEM = {'user': 'SYSTEM'}
SCAN_BATCH_SIZE = 100


def _json_dumps(value: Any) -> bytes:
    """Сериализует JSON-safe данные в bytes для хранения в Redis.

    Входные данные должны быть уже приведены к JSON-совместимому виду:
    сервисы вызывают ``model_dump(mode='json')`` перед записью в кэш.
    """
    return orjson.dumps(value)


def _json_loads(raw: bytes | str) -> Any:
    """Десериализует значение из Redis.

    Если значение не является JSON (например, записано сторонним
    клиентом строкой), возвращается исходная строка.
    """
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        if isinstance(raw, bytes):
            return raw.decode('utf-8', errors='replace')
        return raw


@dataclass(frozen=True, slots=True)
class CacheResult(Generic[T]):
    """Результат операции с кэшем.

    Attributes:
        value: Значение операции (или значение по умолчанию при ошибке).
        error: Ошибка Redis, если операция не выполнена.

    """

    value: T
    error: Optional[CacheError] = None

    @property
    def ok(self) -> bool:
        """True, если операция выполнена без ошибок Redis."""
        return self.error is None


class RedisCache:
    """Асинхронный клиент кэша Redis.

    Класс инкапсулирует:
    - ленивое создание общего пула соединений (один на процесс)
    - сериализацию и десериализацию данных
    - единообразное логирование операций
    - безопасную деградацию при недоступности Redis

    Ни один метод не бросает исключений Redis: ошибка возвращается
    в ``CacheResult.error``. Переподключение выполняет сам пул redis-py.

    Example:
        >>> cache = RedisCache()
        >>> await cache.set('example:key', {'value': 1}, ttl=60)
        >>> result = await cache.get('example:key')
        >>> result.value
        {'value': 1}

    """

    __slots__ = ('_client', '_pool', '_lock')

    def __init__(self, client: Optional[Redis] = None) -> None:
        """Инициализирует кэш; без client соединение создаётся лениво."""
        self._client: Optional[Redis] = client
        self._pool: Optional[ConnectionPool] = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Устанавливает соединение с Redis и инициализирует пул соединений.

        В случае ошибки клиент остаётся неподключённым, а следующая
        операция попробует подключиться снова.
        """
        pool = ConnectionPool.from_url(
            settings.redis.URL,
            password=settings.redis.PASSWORD or None,
            max_connections=settings.redis.MAX_CONNECTIONS,
            socket_connect_timeout=settings.redis.SOCKET_CONNECTION_TIMEOUT,
            socket_timeout=settings.redis.SOCKET_TIMEOUT,
            retry_on_timeout=settings.redis.RETRY_ON_TIMEOUT,
            decode_responses=False,
        )
        client = Redis(connection_pool=pool)

        try:
            await client.ping()
        except (RedisError, OSError) as e:
            logger.error(f'❌ Redis недоступен: {e}', extra=SYSTEM)
            await client.aclose()
            await pool.aclose()
            return

        self._pool = pool
        self._client = client
        logger.info(
            '✅ Redis подключен (pool: %d connections)',
            settings.redis.MAX_CONNECTIONS,
            extra=SYSTEM,
        )

    async def close(self) -> None:
        """Корректно закрывает соединение с Redis и освобождает ресурсы."""
        if self._client:
            await self._client.aclose()
            self._client = None

        if self._pool:
            await self._pool.aclose()
            self._pool = None

        logger.info('Redis connection closed', extra=SYSTEM)

    @property
    def is_available(self) -> bool:
        """Проверяет, создан ли клиент Redis."""
        return self._client is not None

    async def _get_client(self) -> Redis:
        """Возвращает общий клиент, подключаясь при первом обращении."""
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is None:
                await self.connect()

        if self._client is None:
            raise CacheError('Redis is not available')
        return self._client

    async def _execute(
        self,
        command: str,
        target: str,
        default: T,
        operation: Callable[[Redis], Awaitable[T]],
    ) -> CacheResult[T]:
        """Выполняет команду Redis, превращая ошибки в CacheResult."""
        try:
            client = await self._get_client()
            value = await operation(client)
        except CacheError as e:
            logger.warning(
                f'Redis {command} skipped | {target} | {e}',
                extra=SYSTEM,
            )
            return CacheResult(default, e)
        except (RedisError, OSError) as e:
            logger.error(
                f'Redis {command} error | {target} | {e}',
                extra=SYSTEM,
            )
            return CacheResult(default, CacheError(f'{command} failed: {e}'))
        return CacheResult(value)

    async def get(self, key: str) -> CacheResult[Any]:
        """Получает значение из кэша по ключу.

        Returns:
            CacheResult с десериализованными данными или None,
            если ключ отсутствует.

        """

        async def operation(client: Redis) -> Any:
            raw = await client.get(key)
            if raw is None:
                logger.info(f'Cache miss: {key}', extra=SYSTEM)
                return None
            logger.info(f'Cache hit: {key}', extra=SYSTEM)
            return _json_loads(raw)

        return await self._execute('GET', key, None, operation)

    async def set(
        self,
        key: str,
        value: Any,
        *,
        ttl: int = settings.cache.TTL_DEFAULT,
    ) -> CacheResult[bool]:
        """Сохраняет значение в кэш с заданным временем жизни.

        Args:
            key: Ключ Redis.
            value: JSON-safe данные для сохранения.
            ttl: Время жизни записи в секундах.

        """
        try:
            payload = _json_dumps(value)
        except TypeError as e:
            logger.error(
                f'Cache value is not serializable | {key} | {e}',
                extra=SYSTEM,
            )
            return CacheResult(False, CacheError(str(e)))

        async def operation(client: Redis) -> bool:
            await client.set(key, payload, ex=ttl)
            logger.info(f'Cache set: {key} (ttl={ttl}s)', extra=SYSTEM)
            return True

        return await self._execute('SET', key, False, operation)

    async def delete(self, key: str) -> CacheResult[bool]:
        """Удаляет ключ. Отсутствующий ключ - не ошибка, а value=False."""

        async def operation(client: Redis) -> bool:
            deleted = await client.delete(key)
            logger.info(
                f'Cache delete: {key} (deleted={deleted})',
                extra=SYSTEM,
            )
            return deleted > 0

        return await self._execute('DEL', key, False, operation)

    async def delete_many(self, *keys: str) -> CacheResult[int]:
        """Удаляет несколько ключей и возвращает количество удалённых."""
        if not keys:
            return CacheResult(0)

        async def operation(client: Redis) -> int:
            deleted = await client.delete(*keys)
            logger.info(
                f'Cache delete: {list(keys)} (deleted={deleted})',
                extra=SYSTEM,
            )
            return deleted

        return await self._execute('DEL', ','.join(keys), 0, operation)

    async def keys(self, pattern: str) -> CacheResult[list[str]]:
        """Возвращает ключи, соответствующие шаблону (через SCAN)."""

        async def operation(client: Redis) -> list[str]:
            found = []
            async for key in client.scan_iter(
                match=pattern,
                count=SCAN_BATCH_SIZE,
            ):
                found.append(
                    key.decode() if isinstance(key, bytes) else key,
                )
            return found

        return await self._execute('SCAN', pattern, [], operation)

    async def delete_pattern(self, pattern: str) -> CacheResult[int]:
        """Удаляет ключи по шаблону пакетами (например, 'properties:*')."""

        async def operation(client: Redis) -> int:
            deleted = 0
            batch = []

            async for key in client.scan_iter(
                match=pattern,
                count=SCAN_BATCH_SIZE,
            ):
                batch.append(key)
                if len(batch) >= SCAN_BATCH_SIZE:
                    deleted += await client.delete(*batch)
                    batch = []

            if batch:
                deleted += await client.delete(*batch)

            logger.info(
                f'Cache delete by pattern: {pattern} (deleted={deleted})',
                extra=SYSTEM,
            )
            return deleted

        return await self._execute('DEL PATTERN', pattern, 0, operation)

    async def exists(self, key: str) -> CacheResult[bool]:
        """Проверяет существование ключа."""

        async def operation(client: Redis) -> bool:
            return await client.exists(key) == 1

        return await self._execute('EXISTS', key, False, operation)

    async def expire(self, key: str, ttl: int) -> CacheResult[bool]:
        """Обновляет время жизни ключа. False, если ключа нет."""

        async def operation(client: Redis) -> bool:
            return bool(await client.expire(key, ttl))

        return await self._execute('EXPIRE', key, False, operation)


cache = RedisCache()
