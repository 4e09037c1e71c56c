from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.cache import invalidation, reader
from src.cache.client import RedisCache
from src.config import settings
from src.database.base import Base
from tests.factories import failing_redis_client, redis_client_with_data


@pytest.fixture
def redis_client():  # noqa
    return redis_client_with_data()


@pytest.fixture
def cache_client(redis_client):  # noqa
    return RedisCache(client=redis_client)


@pytest.fixture
def failing_cache():  # noqa
    return RedisCache(client=failing_redis_client())


@pytest.fixture
def use_cache(monkeypatch, cache_client):  # noqa
    """Подменяет общий кэш в оркестраторах на кэш с двойником Redis."""
    monkeypatch.setattr(reader, 'cache', cache_client)
    monkeypatch.setattr(invalidation, 'cache', cache_client)
    return cache_client


@pytest_asyncio.fixture
async def engine():  # noqa
    engine = create_async_engine(
        settings.database.URL,
        echo=False,
        pool_pre_ping=True,
    )
    try:
        async with engine.connect():
            pass
    except (OSError, SQLAlchemyError) as e:
        await engine.dispose()
        pytest.skip(f'PostgreSQL недоступен: {e}')
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:  # noqa
    import src.models  # noqa: F401

    async_session_factory = async_sessionmaker(
        engine,
        expire_on_commit=False,
    )

    async with engine.connect() as conn:
        trans = await conn.begin()
        await conn.run_sync(Base.metadata.create_all)

        async with async_session_factory(bind=conn) as session:
            yield session

        await trans.rollback()
