import logging
from datetime import datetime

from studydeck.domain.review.entities import FlashcardReviewState
from studydeck.domain.review.policy import ReviewPolicy
from studydeck.repositories.deck_repository import DeckRepository

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, repository: DeckRepository, policy: ReviewPolicy | None = None):
        self.repository = repository
        self.policy = policy or ReviewPolicy()

    def review(self, *, card_id: str, was_correct: bool, now: datetime) -> FlashcardReviewState | None:
        # читаем актуальное состояние, а не снимок из очереди
        state = self.repository.load_review_state(card_id)
        if state is None:
            return None

        updated = self.policy.record_response(
            state=state,
            was_correct=was_correct,
            now=now,
        )
        self.repository.save_review_state(updated)

        logger.info(
            "Card %s reviewed: correct=%s repetitions=%d next_review=%s",
            card_id,
            was_correct,
            updated.repetitions,
            updated.next_review.isoformat(),
        )
        return updated
