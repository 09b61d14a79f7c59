# backend/studydeck/domain/review/queue.py

import random
from datetime import datetime
from typing import Protocol, Sequence, TypeVar

from studydeck.core.timeutils import ensure_utc


class SupportsNextReview(Protocol):
    next_review: datetime | None


CardT = TypeVar("CardT", bound=SupportsNextReview)


def is_due(card: SupportsNextReview, now: datetime) -> bool:
    next_review = ensure_utc(card.next_review)
    return next_review is None or next_review <= now


class StudyQueueBuilder:
    """
    Порядок карточек для сессии.

    Сначала все карточки к повторению, потом остальные. Внутри каждой
    группы порядок случайный (random.shuffle, Фишер-Йетс).
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def partition(self, cards: Sequence[CardT], now: datetime) -> tuple[list[CardT], list[CardT]]:
        due: list[CardT] = []
        not_due: list[CardT] = []
        for card in cards:
            if is_due(card, now):
                due.append(card)
            else:
                not_due.append(card)
        return due, not_due

    def build_queue(self, cards: Sequence[CardT], now: datetime) -> list[CardT]:
        due, not_due = self.partition(cards, now)
        self._rng.shuffle(due)
        self._rng.shuffle(not_due)
        return due + not_due

    def build_restart_queue(self, cards: Sequence[CardT]) -> list[CardT]:
        # при перезапуске перемешиваем весь набор одной группой
        queue = list(cards)
        self._rng.shuffle(queue)
        return queue
