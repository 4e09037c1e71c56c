from src.database.base import Base
from src.favourites.models import Favourite
from src.properties.models import Property
from src.recommendations.models import Recommendation
from src.users.models import User


__all__ = [
    'Base',
    'User',
    'Property',
    'Favourite',
    'Recommendation',
]
