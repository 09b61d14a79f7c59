# backend/studydeck/domain/review/entities.py

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass
class FlashcardReviewState:
    """
    Чистое domain-состояние повторений карточки.
    Не знает про БД, ORM и SQLAlchemy.
    """

    card_id: str
    repetitions: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    last_reviewed: datetime | None = None
    next_review: datetime | None = None

    # ----------------
    # Domain behaviour
    # ----------------

    def apply_response(
            self,
            *,
            was_correct: bool,
            reviewed_at: datetime,
            interval: timedelta,
    ):
        self.repetitions += 1

        if was_correct:
            self.correct_count += 1
        else:
            self.incorrect_count += 1

        self.last_reviewed = reviewed_at
        self.next_review = reviewed_at + interval

        self._validate()

    # ---------
    # Invariants
    # ---------

    def _validate(self):
        if self.repetitions < 0:
            raise ValueError("repetitions cannot be negative")

        if self.correct_count < 0 or self.incorrect_count < 0:
            raise ValueError("review counters cannot be negative")

        if (
                self.next_review is not None
                and self.last_reviewed is not None
                and self.next_review <= self.last_reviewed
        ):
            raise ValueError("next_review must be after last_reviewed")
