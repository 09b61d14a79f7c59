"""
Сводная статистика по всем колодам.

Только чистые функции над уже загруженными колодами, без БД и FastAPI.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from studydeck.domain.review.dto import percent
from studydeck.domain.review.queue import is_due

MASTERED_MIN_REPETITIONS = 5
MASTERED_CORRECT_RATIO = 3


def format_study_time(seconds: int) -> str:
    """
    >>> format_study_time(3660)
    '1h 1m'
    >>> format_study_time(59)
    '0m'
    """
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def is_mastered(card) -> bool:
    return (
        card.repetitions >= MASTERED_MIN_REPETITIONS
        and card.correct_count > card.incorrect_count * MASTERED_CORRECT_RATIO
    )


def card_accuracy(card) -> int:
    """Доля верных ответов по одной карточке, 0 если ответов не было."""
    return percent(card.correct_count, card.correct_count + card.incorrect_count)


def mean_card_accuracy(cards) -> int:
    """
    Среднее по карточкам колоды: карточка без ответов считается как 0.

    >>> from types import SimpleNamespace as C
    >>> mean_card_accuracy([C(correct_count=1, incorrect_count=1), C(correct_count=0, incorrect_count=0)])
    25
    >>> mean_card_accuracy([])
    0
    """
    cards = list(cards)
    ratios = sum(
        card.correct_count / (card.correct_count + card.incorrect_count)
        for card in cards
        if card.correct_count + card.incorrect_count
    )
    return percent(ratios, len(cards))


@dataclass(frozen=True)
class SubjectPerformance:
    subject: str
    cards: int
    accuracy: int
    reviews: int


@dataclass(frozen=True)
class StudyStatistics:
    total_decks: int
    total_cards: int
    total_study_time: int
    total_correct: int
    total_incorrect: int
    overall_accuracy: int
    mastered_cards: int
    due_cards: int
    subjects: list[SubjectPerformance] = field(default_factory=list)

    @property
    def total_reviews(self) -> int:
        return self.total_correct + self.total_incorrect

    @property
    def formatted_study_time(self) -> str:
        return format_study_time(self.total_study_time)


def deck_accuracy(deck) -> tuple[int, int]:
    """(точность в процентах, число ответов) для одной колоды."""
    correct = sum(card.correct_count for card in deck.cards)
    incorrect = sum(card.incorrect_count for card in deck.cards)
    return percent(correct, correct + incorrect), correct + incorrect


def subject_performance(decks: Iterable) -> list[SubjectPerformance]:
    buckets: dict[str, dict[str, int]] = {}

    for deck in decks:
        accuracy, reviews = deck_accuracy(deck)
        bucket = buckets.setdefault(
            deck.subject,
            {"cards": 0, "accuracy": 0, "reviews": 0, "count": 0},
        )
        bucket["cards"] += len(deck.cards)
        bucket["accuracy"] += accuracy
        bucket["reviews"] += reviews
        bucket["count"] += 1

    result = [
        SubjectPerformance(
            subject=subject,
            cards=b["cards"],
            # среднее по колодам, а не по ответам
            accuracy=math.floor(b["accuracy"] / b["count"] + 0.5),
            reviews=b["reviews"],
        )
        for subject, b in buckets.items()
    ]
    result.sort(key=lambda s: s.reviews, reverse=True)
    return result


def collect_statistics(decks: Iterable, now: datetime) -> StudyStatistics:
    decks = list(decks)
    cards = [card for deck in decks for card in deck.cards]

    total_correct = sum(card.correct_count for card in cards)
    total_incorrect = sum(card.incorrect_count for card in cards)

    return StudyStatistics(
        total_decks=len(decks),
        total_cards=len(cards),
        total_study_time=sum(deck.total_study_time for deck in decks),
        total_correct=total_correct,
        total_incorrect=total_incorrect,
        overall_accuracy=percent(total_correct, total_correct + total_incorrect),
        mastered_cards=sum(1 for card in cards if is_mastered(card)),
        due_cards=sum(1 for card in cards if is_due(card, now)),
        subjects=subject_performance(decks),
    )
