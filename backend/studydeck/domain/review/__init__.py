from .dto import DeckStudyUpdate, SessionStats
from .entities import FlashcardReviewState
from .policy import ReviewPolicy
from .queue import StudyQueueBuilder, is_due

__all__ = [
    "DeckStudyUpdate",
    "FlashcardReviewState",
    "ReviewPolicy",
    "SessionStats",
    "StudyQueueBuilder",
    "is_due",
]
