from fastapi import APIRouter

from src.auth import auth_router
from src.favourites import favourites_router
from src.properties import properties_router
from src.recommendations import recommendations_router


main_router = APIRouter(prefix='/api')

main_router.include_router(
    auth_router,
    prefix='/auth',
    tags=['Аутентификация'],
)
main_router.include_router(
    properties_router,
    prefix='/properties',
    tags=['Объекты недвижимости'],
)
main_router.include_router(
    favourites_router,
    prefix='/favourites',
    tags=['Избранное'],
)
main_router.include_router(
    recommendations_router,
    prefix='/recommendations',
    tags=['Рекомендации'],
)
