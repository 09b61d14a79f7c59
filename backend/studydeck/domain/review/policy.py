# backend/studydeck/domain/review/policy.py

import math
from dataclasses import replace
from datetime import datetime, timedelta

from .dto import DeckStudyUpdate, SessionStats
from .entities import FlashcardReviewState


class ReviewPolicy:
    """
    Расчёт следующего повторения и итогов сессии.
    Чистая domain-логика, в хранилище ничего не пишет.
    """

    # интервалы для первых правильных ответов, по новому числу повторений
    CORRECT_INTERVAL_DAYS = {
        1: 1,
        2: 3,
        3: 7,
    }
    INCORRECT_INTERVAL_DAYS = 1
    DAYS_PER_REPETITION = 7
    MAX_INTERVAL_DAYS = 30

    def days_until_next_review(self, *, new_repetitions: int, was_correct: bool) -> int:
        if not was_correct:
            return self.INCORRECT_INTERVAL_DAYS

        if new_repetitions in self.CORRECT_INTERVAL_DAYS:
            return self.CORRECT_INTERVAL_DAYS[new_repetitions]

        return min(self.MAX_INTERVAL_DAYS, new_repetitions * self.DAYS_PER_REPETITION)

    def calculate_next_review(self, *, state, was_correct, now):
        days = self.days_until_next_review(
            new_repetitions=state.repetitions + 1,
            was_correct=was_correct,
        )
        # ровно 24ч * дни, без округления до календарных суток
        return now + timedelta(days=days)

    def record_response(
            self,
            *,
            state: FlashcardReviewState,
            was_correct: bool,
            now: datetime,
    ) -> FlashcardReviewState:
        updated = replace(state)
        interval = self.calculate_next_review(state=state, was_correct=was_correct, now=now) - now

        updated.apply_response(
            was_correct=was_correct,
            reviewed_at=now,
            interval=interval,
        )
        return updated

    def complete_session(
            self,
            *,
            stats: SessionStats,
            started_at: datetime,
            now: datetime,
            previous_total: int,
    ) -> DeckStudyUpdate:
        elapsed = max(0, math.floor((now - started_at).total_seconds()))

        return DeckStudyUpdate(
            last_studied=now,
            total_study_time=previous_total + elapsed,
            elapsed_seconds=elapsed,
            session_stats=stats,
        )
