import logging
import random
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Iterator

from studydeck.core.timeutils import utcnow
from studydeck.domain.review.dto import DeckStudyUpdate
from studydeck.domain.review.entities import FlashcardReviewState
from studydeck.domain.review.policy import ReviewPolicy
from studydeck.domain.review.queue import StudyQueueBuilder
from studydeck.domain.study.session import StudySession
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.services.review_service import ReviewService

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(hours=2)


class DeckNotFoundError(LookupError):
    pass


class SessionNotFoundError(LookupError):
    pass


@dataclass
class _Entry:
    session: StudySession
    touched_at: datetime
    lock: threading.Lock = field(default_factory=threading.Lock)


class StudySessionRegistry:
    """
    Сессии живут в памяти процесса и никогда не пишутся в БД.

    Сессия, к которой не обращались дольше ttl, выбрасывается при
    следующем add. Изменения одной сессии идут под её собственным
    замком (locked), чтобы двойной ответ не пропустил карточку.
    """

    def __init__(
            self,
            ttl: timedelta = DEFAULT_SESSION_TTL,
            clock: Callable[[], datetime] = utcnow,
    ):
        self.ttl = ttl
        self.clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def add(self, session: StudySession):
        now = self.clock()
        with self._lock:
            self._evict_idle(now)
            self._entries[session.id] = _Entry(session=session, touched_at=now)

    def get(self, session_id: str) -> StudySession:
        return self._touch(session_id).session

    @contextmanager
    def locked(self, session_id: str) -> Iterator[StudySession]:
        entry = self._touch(session_id)
        with entry.lock:
            yield entry.session

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._entries.pop(session_id, None) is not None

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def _touch(self, session_id: str) -> _Entry:
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                raise SessionNotFoundError(session_id)
            entry.touched_at = self.clock()
            return entry

    def _evict_idle(self, now: datetime):
        expired = [
            session_id
            for session_id, entry in self._entries.items()
            if now - entry.touched_at > self.ttl
        ]
        for session_id in expired:
            del self._entries[session_id]
        if expired:
            logger.info("Evicted %d idle study sessions", len(expired))


@dataclass
class AnswerOutcome:
    session: StudySession
    review: FlashcardReviewState | None
    deck_update: DeckStudyUpdate | None = None


class StudyService:
    """
    Контроллер сессии изучения.

    Берёт карточки колоды из репозитория, строит очередь, на каждый ответ
    пересчитывает карточку и сохраняет её, а в конце сессии записывает
    в колоду время занятий.
    """

    def __init__(
            self,
            repository: DeckRepository,
            registry: StudySessionRegistry,
            *,
            policy: ReviewPolicy | None = None,
            rng: random.Random | None = None,
            clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.registry = registry
        self.policy = policy or ReviewPolicy()
        self.builder = StudyQueueBuilder(rng)
        self.clock = clock
        self.reviews = ReviewService(repository, self.policy)

    def start(self, deck_id: str) -> StudySession:
        deck = self.repository.get_deck(deck_id)
        if deck is None:
            raise DeckNotFoundError(deck_id)

        session = StudySession.start(
            deck_id=deck.id,
            cards=self.repository.load_study_cards(deck),
            now=self.clock(),
            builder=self.builder,
        )
        self.registry.add(session)

        logger.info(
            "Study session %s started for deck %s: %d cards, status=%s",
            session.id,
            deck.id,
            session.total,
            session.status.value,
        )
        return session

    def get(self, session_id: str) -> StudySession:
        return self.registry.get(session_id)

    def flip(self, session_id: str) -> StudySession:
        with self.registry.locked(session_id) as session:
            session.flip()
            return session

    def answer(self, session_id: str, *, correct: bool) -> AnswerOutcome:
        """
        Ответ на текущую карточку.

        Если карточку удалили во время сессии, ответ всё равно засчитывается
        в сессию, а review в результате будет None.
        """
        with self.registry.locked(session_id) as session:
            card = session.current_card
            now = self.clock()

            # проверка состояния раньше записи в БД
            completed = session.record_answer(was_correct=correct, now=now)
            review = self.reviews.review(card_id=card.id, was_correct=correct, now=now)
            if review is None:
                logger.warning("Card %s removed during session %s", card.id, session.id)

            outcome = AnswerOutcome(session=session, review=review)
            if completed:
                outcome.deck_update = self._complete(session, now)
            return outcome

    def restart(self, session_id: str) -> StudySession:
        with self.registry.locked(session_id) as session:
            deck = self.repository.get_deck(session.deck_id)
            if deck is None:
                raise DeckNotFoundError(session.deck_id)

            # карточки берём заново: после сессии у них другие даты
            session.restart(
                cards=self.repository.load_study_cards(deck),
                now=self.clock(),
                builder=self.builder,
            )
            logger.info("Study session %s restarted with %d cards", session.id, session.total)
            return session

    def discard(self, session_id: str) -> bool:
        return self.registry.discard(session_id)

    def _complete(self, session: StudySession, now: datetime) -> DeckStudyUpdate | None:
        deck = self.repository.get_deck(session.deck_id)
        if deck is None:
            logger.warning("Deck %s removed during session %s", session.deck_id, session.id)
            return None

        update = self.policy.complete_session(
            stats=session.stats,
            started_at=session.started_at,
            now=now,
            previous_total=deck.total_study_time,
        )
        self.repository.apply_study_update(deck.id, update)

        logger.info(
            "Study session %s complete: correct=%d incorrect=%d elapsed=%ds",
            session.id,
            session.stats.correct,
            session.stats.incorrect,
            update.elapsed_seconds,
        )
        return update
