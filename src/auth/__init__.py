from src.auth.views import router as auth_router


__all__ = ['auth_router']
