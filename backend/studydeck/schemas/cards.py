from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from studydeck.schemas.common import UTCDateTime
from studydeck.core.enums import Difficulty


class CardCreate(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    difficulty: Difficulty = Difficulty.medium


class CardUpdate(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None
    difficulty: Optional[Difficulty] = None


class CardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    deck_id: str
    question: str
    answer: str
    difficulty: Difficulty

    repetitions: int
    correct_count: int
    incorrect_count: int
    accuracy: int

    last_reviewed: Optional[UTCDateTime] = None
    next_review: Optional[UTCDateTime] = None
