from datetime import datetime, timedelta, timezone

import pytest

from studydeck.domain.review.dto import SessionStats
from studydeck.domain.review.entities import FlashcardReviewState
from studydeck.domain.review.policy import ReviewPolicy

NOW = datetime(2024, 11, 18, 12, 0, tzinfo=timezone.utc)

policy = ReviewPolicy()


@pytest.mark.parametrize(
    "new_repetitions, expected_days",
    [
        (1, 1),
        (2, 3),
        (3, 7),
        (4, 28),
        (5, 30),
        (12, 30),
    ],
)
def test_correct_answer_interval_table(new_repetitions, expected_days):
    assert policy.days_until_next_review(
        new_repetitions=new_repetitions,
        was_correct=True,
    ) == expected_days


@pytest.mark.parametrize("new_repetitions", [1, 2, 4, 20])
def test_incorrect_answer_is_always_one_day(new_repetitions):
    assert policy.days_until_next_review(
        new_repetitions=new_repetitions,
        was_correct=False,
    ) == 1


def test_successive_correct_answers_follow_table():
    state = FlashcardReviewState(card_id="c1")
    intervals = []
    now = NOW

    for _ in range(4):
        state = policy.record_response(state=state, was_correct=True, now=now)
        intervals.append(state.next_review - now)
        now = state.next_review

    assert intervals == [
        timedelta(days=1),
        timedelta(days=3),
        timedelta(days=7),
        timedelta(days=28),
    ]


def test_next_review_is_exact_duration_from_now():
    # время не округляется до начала суток
    now = datetime(2024, 3, 30, 23, 59, 30, tzinfo=timezone.utc)
    state = FlashcardReviewState(card_id="c1", repetitions=1, correct_count=1)

    updated = policy.record_response(state=state, was_correct=True, now=now)

    assert updated.next_review == now + timedelta(hours=72)
    assert updated.last_reviewed == now


def test_record_response_counts_correct_answer():
    state = FlashcardReviewState(card_id="c1", repetitions=3, correct_count=2, incorrect_count=1)

    updated = policy.record_response(state=state, was_correct=True, now=NOW)

    assert updated.repetitions == 4
    assert updated.correct_count == 3
    assert updated.incorrect_count == 1


def test_record_response_counts_incorrect_answer():
    state = FlashcardReviewState(card_id="c1", repetitions=3, correct_count=2, incorrect_count=1)

    updated = policy.record_response(state=state, was_correct=False, now=NOW)

    assert updated.repetitions == 4
    assert updated.correct_count == 2
    assert updated.incorrect_count == 2
    assert updated.next_review - NOW == timedelta(days=1)


def test_record_response_does_not_mutate_input():
    state = FlashcardReviewState(card_id="c1")

    policy.record_response(state=state, was_correct=True, now=NOW)

    assert state.repetitions == 0
    assert state.next_review is None


def test_complete_session_accounts_elapsed_seconds():
    started_at = NOW
    now = started_at + timedelta(milliseconds=125_000)

    update = policy.complete_session(
        stats=SessionStats(correct=3, incorrect=1),
        started_at=started_at,
        now=now,
        previous_total=3600,
    )

    assert update.elapsed_seconds == 125
    assert update.total_study_time == 3725
    assert update.last_studied == now
    assert update.session_stats.total == 4


def test_complete_session_floors_partial_seconds():
    update = policy.complete_session(
        stats=SessionStats(),
        started_at=NOW,
        now=NOW + timedelta(milliseconds=1999),
        previous_total=0,
    )

    assert update.elapsed_seconds == 1
    assert update.total_study_time == 1
