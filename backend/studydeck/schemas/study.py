from typing import Optional

from pydantic import BaseModel

from studydeck.schemas.common import UTCDateTime
from studydeck.schemas.decks import DeckPatchResponse
from studydeck.core.enums import Difficulty, SessionStatus


class StudyCardView(BaseModel):
    id: str
    question: str
    # ответ отдаём только после переворота карточки
    answer: Optional[str] = None
    difficulty: Difficulty


class SessionStatsView(BaseModel):
    correct: int
    incorrect: int
    total: int
    accuracy: int


class StudySessionResponse(BaseModel):
    session_id: str
    deck_id: str
    status: SessionStatus

    position: int
    total: int
    progress: float
    flipped: bool

    card: Optional[StudyCardView] = None
    stats: SessionStatsView

    started_at: UTCDateTime
    elapsed_seconds: int


class AnswerRequest(BaseModel):
    correct: bool


class CardReviewResult(BaseModel):
    card_id: str
    repetitions: int
    correct_count: int
    incorrect_count: int
    last_reviewed: UTCDateTime
    next_review: UTCDateTime


class AnswerResponse(BaseModel):
    # None, если карточку удалили во время сессии
    review: Optional[CardReviewResult] = None
    session: StudySessionResponse
    # заполнено только ответом на последнюю карточку
    deck_update: Optional[DeckPatchResponse] = None
