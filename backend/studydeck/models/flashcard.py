import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studydeck.core.enums import Difficulty
from studydeck.db.base import Base
from studydeck.domain.statistics import card_accuracy

if TYPE_CHECKING:
    from studydeck.models.deck import Deck


class Flashcard(Base):
    __tablename__ = "flashcards"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )

    deck_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("decks.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # порядок добавления внутри колоды
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)

    difficulty: Mapped[Difficulty] = mapped_column(
        Enum(Difficulty, name="card_difficulty"),
        default=Difficulty.medium,
        nullable=False
    )

    repetitions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    correct_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    incorrect_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    last_reviewed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # None = ещё не повторяли, карточка к повторению сразу
    next_review: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    deck: Mapped["Deck"] = relationship("Deck", back_populates="cards")

    @property
    def accuracy(self) -> int:
        return card_accuracy(self)
