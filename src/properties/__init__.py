from src.properties.views import router as properties_router


__all__ = ['properties_router']
