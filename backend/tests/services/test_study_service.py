import random
from datetime import datetime, timedelta, timezone

import pytest

from studydeck.core.enums import SessionStatus
from studydeck.domain.study.session import SessionStateError
from studydeck.models.deck import Deck
from studydeck.services.study_service import (
    DeckNotFoundError,
    SessionNotFoundError,
    StudyService,
    StudySessionRegistry,
)

START = datetime(2024, 11, 18, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
def service(repository, clock):
    return StudyService(
        repository,
        StudySessionRegistry(),
        rng=random.Random(11),
        clock=clock,
    )


@pytest.fixture
def deck(repository) -> Deck:
    deck = repository.create_deck(name="Spanish Vocabulary", subject="Languages")
    deck.total_study_time = 2400
    repository.update_deck(deck)
    repository.add_card(deck, question="Hello", answer="Hola")
    repository.add_card(deck, question="Thank you", answer="Gracias")
    return repository.get_deck(deck.id)


def test_session_completion_adds_elapsed_seconds(service, clock, repository, deck):
    session = service.start(deck.id)

    clock.advance(seconds=60)
    first = service.answer(session.id, correct=True)
    assert first.deck_update is None

    clock.advance(seconds=65)
    last = service.answer(session.id, correct=False)

    assert session.status == SessionStatus.complete
    assert last.deck_update.elapsed_seconds == 125
    assert last.deck_update.total_study_time == 2525

    stored = repository.get_deck(deck.id)
    assert stored.total_study_time == 2525
    assert stored.last_studied.replace(tzinfo=timezone.utc) == START + timedelta(seconds=125)


def test_each_answer_is_persisted(service, clock, repository, deck):
    session = service.start(deck.id)
    card_id = session.current_card.id

    outcome = service.answer(session.id, correct=True)

    state = repository.load_review_state(card_id)
    assert state == outcome.review
    assert state.repetitions == 1
    assert state.last_reviewed == START
    assert state.next_review == START + timedelta(days=1)


def test_restart_reads_fresh_review_dates(service, clock, repository, deck):
    session = service.start(deck.id)
    service.answer(session.id, correct=True)
    service.answer(session.id, correct=True)

    clock.advance(minutes=5)
    service.restart(session.id)

    # после ответов обе карточки не к повторению, но перезапуск берёт все
    assert session.total == 2
    assert all(card.next_review == START + timedelta(days=1) for card in session.queue)
    assert session.started_at == START + timedelta(minutes=5)


def test_answer_on_empty_session_is_rejected(service, repository):
    empty = repository.create_deck(name="Empty", subject="Art")
    session = service.start(empty.id)

    assert session.status == SessionStatus.empty
    with pytest.raises(SessionStateError):
        service.answer(session.id, correct=True)


def test_unknown_deck_and_session(service):
    with pytest.raises(DeckNotFoundError):
        service.start("missing")
    with pytest.raises(SessionNotFoundError):
        service.get("missing")


def test_answer_on_deleted_card_still_completes_session(service, clock, repository, deck):
    session = service.start(deck.id)
    service.answer(session.id, correct=True)

    last_card = repository.get_card(deck.id, session.current_card.id)
    repository.delete_card(last_card)

    clock.advance(seconds=30)
    outcome = service.answer(session.id, correct=True)

    assert outcome.review is None
    assert session.status == SessionStatus.complete
    assert outcome.deck_update.total_study_time == 2430
