import math
from dataclasses import dataclass
from datetime import datetime


def percent(part: int | float, total: int | float) -> int:
    # округление половин вверх, как Math.round на клиенте
    if not total:
        return 0
    return math.floor(part / total * 100 + 0.5)


@dataclass(frozen=True)
class SessionStats:
    correct: int = 0
    incorrect: int = 0

    @property
    def total(self) -> int:
        return self.correct + self.incorrect

    @property
    def accuracy(self) -> int:
        return percent(self.correct, self.total)

    def with_response(self, was_correct: bool) -> "SessionStats":
        if was_correct:
            return SessionStats(correct=self.correct + 1, incorrect=self.incorrect)
        return SessionStats(correct=self.correct, incorrect=self.incorrect + 1)


@dataclass(frozen=True)
class DeckStudyUpdate:
    """Что нужно записать в колоду после завершённой сессии."""

    last_studied: datetime
    total_study_time: int
    elapsed_seconds: int
    session_stats: SessionStats
