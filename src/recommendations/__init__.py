from src.recommendations.views import router as recommendations_router


__all__ = ['recommendations_router']
