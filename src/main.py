from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api import main_router
from src.cache.client import cache
from src.common.exception_handlers import add_exception_handlers
from src.config import settings
from src.database.sessions import create_tables


logger = logging.getLogger('app')


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Управляет жизненным циклом FastAPI-приложения."""
    if settings.database.CREATE_TABLES:
        await create_tables()
        logger.info('Таблицы БД готовы', extra={'user': 'SYSTEM'})
    await cache.connect()
    if not cache.is_available:
        logger.warning(
            'Приложение запущено без кэша Redis',
            extra={'user': 'SYSTEM'},
        )
    yield
    await cache.close()


app = FastAPI(title='Property Listings', lifespan=lifespan)

add_exception_handlers(app)
app.include_router(main_router)
