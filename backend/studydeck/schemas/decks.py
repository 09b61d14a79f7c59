from typing import List, Optional

from pydantic import BaseModel, Field

from studydeck.schemas.common import UTCDateTime
from studydeck.schemas.cards import CardResponse


class DeckCreate(BaseModel):
    name: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    description: str = ""
    color: str = "bg-blue-500"


class DeckUpdate(BaseModel):
    name: Optional[str] = None
    subject: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


class DeckSummary(BaseModel):
    id: str
    name: str
    subject: str
    description: str
    color: str

    cards_count: int
    due_count: int
    mastered_count: int
    # среднее по карточкам, карточки без ответов считаются как 0
    accuracy: int

    created_at: UTCDateTime
    last_studied: Optional[UTCDateTime] = None
    total_study_time: int
    is_ai_generated: bool


class DeckDetail(DeckSummary):
    cards: List[CardResponse] = []


class DeckOverviewResponse(BaseModel):
    """Шапка главного экрана."""

    total_cards: int
    due_cards: int
    total_study_time: int
    formatted_study_time: str
    decks: List[DeckSummary]


class DeckPatchResponse(BaseModel):
    """Что записано в колоду по завершении сессии."""

    id: str
    last_studied: UTCDateTime
    total_study_time: int
    elapsed_seconds: int
