from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.config import MAX_NAME_LENGTH, MAX_STRING_LENGTH
from src.database import Base


class User(Base):
    """Модель для пользователей.

    Email хранится в нижнем регистре, уникальность обеспечивает
    ограничение БД.
    """

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_STRING_LENGTH),
        unique=True,
        index=True,
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(
        String(MAX_STRING_LENGTH),
        nullable=False,
    )
