from fastapi import APIRouter, Depends

from studydeck.api.deps import get_repository
from studydeck.core.timeutils import utcnow
from studydeck.domain.statistics import collect_statistics
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.schemas.statistics import StatisticsResponse, SubjectPerformanceResponse

router = APIRouter(tags=["statistics"])


@router.get("/", response_model=StatisticsResponse)
def get_statistics(repository: DeckRepository = Depends(get_repository)):
    """Сводная статистика по всем колодам"""
    stats = collect_statistics(repository.list_decks(), utcnow())

    return StatisticsResponse(
        total_decks=stats.total_decks,
        total_cards=stats.total_cards,
        total_study_time=stats.total_study_time,
        formatted_study_time=stats.formatted_study_time,
        total_correct=stats.total_correct,
        total_incorrect=stats.total_incorrect,
        total_reviews=stats.total_reviews,
        overall_accuracy=stats.overall_accuracy,
        mastered_cards=stats.mastered_cards,
        due_cards=stats.due_cards,
        subjects=[
            SubjectPerformanceResponse(
                subject=s.subject,
                cards=s.cards,
                accuracy=s.accuracy,
                reviews=s.reviews,
            )
            for s in stats.subjects
        ],
    )
