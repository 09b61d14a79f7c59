from typing import List

from pydantic import BaseModel


class SubjectPerformanceResponse(BaseModel):
    subject: str
    cards: int
    accuracy: int
    reviews: int


class StatisticsResponse(BaseModel):
    total_decks: int
    total_cards: int
    total_study_time: int
    formatted_study_time: str

    total_correct: int
    total_incorrect: int
    total_reviews: int
    overall_accuracy: int

    mastered_cards: int
    due_cards: int

    subjects: List[SubjectPerformanceResponse]
