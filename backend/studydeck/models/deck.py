import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studydeck.core.timeutils import utcnow
from studydeck.db.base import Base

if TYPE_CHECKING:
    from studydeck.models.flashcard import Flashcard


class Deck(Base):
    __tablename__ = "decks"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # только для отображения, например "bg-blue-500"
    color: Mapped[str] = mapped_column(String(50), default="bg-blue-500", nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_studied: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # секунды по всем завершённым сессиям
    total_study_time: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    is_ai_generated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    cards: Mapped[list["Flashcard"]] = relationship(
        "Flashcard",
        back_populates="deck",
        cascade="all, delete-orphan",
        order_by="Flashcard.position",
    )
