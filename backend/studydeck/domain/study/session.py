# backend/studydeck/domain/study/session.py

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from studydeck.core.enums import Difficulty, SessionStatus
from studydeck.domain.review.dto import SessionStats
from studydeck.domain.review.queue import StudyQueueBuilder


class SessionStateError(ValueError):
    """Действие недопустимо в текущем состоянии сессии."""


@dataclass(frozen=True)
class StudyCard:
    """Снимок карточки на момент старта сессии."""

    id: str
    question: str
    answer: str
    difficulty: Difficulty = Difficulty.medium
    next_review: datetime | None = None


@dataclass
class StudySession:
    """
    Одна сессия изучения колоды.

    Живёт только в памяти: создаётся при входе в режим изучения,
    выбрасывается после завершения или ухода со страницы.

        NotStarted -> InProgress -> Complete -> (restart) -> InProgress
        NotStarted -> Empty, если в колоде нет карточек
    """

    deck_id: str
    started_at: datetime
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    status: SessionStatus = SessionStatus.not_started
    queue: list[StudyCard] = field(default_factory=list)
    index: int = 0
    flipped: bool = False
    stats: SessionStats = field(default_factory=SessionStats)
    completed_at: datetime | None = None

    @classmethod
    def start(
            cls,
            *,
            deck_id: str,
            cards: Sequence[StudyCard],
            now: datetime,
            builder: StudyQueueBuilder,
    ) -> "StudySession":
        session = cls(deck_id=deck_id, started_at=now)
        session._load_queue(builder.build_queue(cards, now))
        return session

    # ----------
    # Queries
    # ----------

    @property
    def current_card(self) -> StudyCard | None:
        if self.status != SessionStatus.in_progress:
            return None
        return self.queue[self.index]

    @property
    def total(self) -> int:
        return len(self.queue)

    @property
    def is_last_card(self) -> bool:
        return self.index == len(self.queue) - 1

    @property
    def progress(self) -> float:
        if not self.queue:
            return 0.0
        if self.status == SessionStatus.complete:
            return 100.0
        return self.index / len(self.queue) * 100

    def elapsed_seconds(self, now: datetime) -> int:
        end = self.completed_at or now
        return max(0, int((end - self.started_at).total_seconds()))

    # ----------------
    # Transitions
    # ----------------

    def flip(self) -> bool:
        self._require(SessionStatus.in_progress, "flip")
        self.flipped = not self.flipped
        return self.flipped

    def record_answer(self, *, was_correct: bool, now: datetime) -> bool:
        """
        Засчитать ответ на текущую карточку и перейти к следующей.
        Возвращает True, если это была последняя карточка.
        """
        self._require(SessionStatus.in_progress, "answer")

        self.stats = self.stats.with_response(was_correct)

        if not self.is_last_card:
            self.index += 1
            self.flipped = False
            return False

        self.status = SessionStatus.complete
        self.completed_at = now
        return True

    def restart(
            self,
            *,
            cards: Sequence[StudyCard],
            now: datetime,
            builder: StudyQueueBuilder,
    ):
        self._require(SessionStatus.complete, "restart")

        self.started_at = now
        self.completed_at = None
        self.stats = SessionStats()
        self._load_queue(builder.build_restart_queue(cards))

    def _load_queue(self, queue: list[StudyCard]):
        self.queue = queue
        self.index = 0
        self.flipped = False
        self.status = SessionStatus.in_progress if queue else SessionStatus.empty

    def _require(self, status: SessionStatus, action: str):
        if self.status != status:
            raise SessionStateError(
                f"Cannot {action} while session is {self.status.value}"
            )
