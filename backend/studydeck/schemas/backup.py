from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from studydeck.schemas.common import UTCDateTime
from studydeck.core.enums import Difficulty


class BackupModel(BaseModel):
    """Формат резервной копии совпадает с тем, что клиент хранил в localStorage (camelCase)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CardBackup(BackupModel):
    id: str
    question: str
    answer: str
    difficulty: Difficulty = Difficulty.medium

    repetitions: int = Field(default=0, ge=0)
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)

    last_reviewed: Optional[UTCDateTime] = None
    next_review: Optional[UTCDateTime] = None


class DeckBackup(BackupModel):
    id: str
    name: str
    subject: str
    description: str = ""
    color: str = "bg-blue-500"

    cards: List[CardBackup] = []

    created_at: UTCDateTime
    last_studied: Optional[UTCDateTime] = None
    total_study_time: int = Field(default=0, ge=0)
    is_ai_generated: bool = Field(default=False, alias="isAIGenerated")


class ImportResult(BaseModel):
    decks: int
    cards: int
