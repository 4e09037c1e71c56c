from src.favourites.views import router as favourites_router


__all__ = ['favourites_router']
