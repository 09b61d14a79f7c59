from sqlalchemy import Integer, Enum
from sqlalchemy.orm import Mapped, mapped_column

from studydeck.core.enums import Theme
from studydeck.db.base import Base


class Preference(Base):
    """Настройки приложения, одна строка на всю базу."""

    __tablename__ = "preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)

    theme: Mapped[Theme] = mapped_column(
        Enum(Theme, name="app_theme"),
        default=Theme.light,
        nullable=False
    )
