from src.database.base import Base
from src.database.service import DatabaseService
from src.database.sessions import engine, get_async_session


__all__ = [
    'engine',
    'get_async_session',
    'Base',
    'DatabaseService',
]
