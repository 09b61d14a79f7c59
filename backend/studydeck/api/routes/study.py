from fastapi import APIRouter, Depends, HTTPException, status

from studydeck.api.deps import get_study_service
from studydeck.core.timeutils import utcnow
from studydeck.domain.review.dto import DeckStudyUpdate
from studydeck.domain.review.entities import FlashcardReviewState
from studydeck.domain.study.session import SessionStateError, StudySession
from studydeck.schemas.decks import DeckPatchResponse
from studydeck.schemas.study import (
    AnswerRequest,
    AnswerResponse,
    CardReviewResult,
    SessionStatsView,
    StudyCardView,
    StudySessionResponse,
)
from studydeck.services.study_service import (
    DeckNotFoundError,
    SessionNotFoundError,
    StudyService,
)

router = APIRouter(tags=["study"])


def _session_response(session: StudySession) -> StudySessionResponse:
    card = session.current_card
    card_view = None
    if card is not None:
        card_view = StudyCardView(
            id=card.id,
            question=card.question,
            answer=card.answer if session.flipped else None,
            difficulty=card.difficulty,
        )

    return StudySessionResponse(
        session_id=session.id,
        deck_id=session.deck_id,
        status=session.status,
        position=session.index,
        total=session.total,
        progress=session.progress,
        flipped=session.flipped,
        card=card_view,
        stats=SessionStatsView(
            correct=session.stats.correct,
            incorrect=session.stats.incorrect,
            total=session.stats.total,
            accuracy=session.stats.accuracy,
        ),
        started_at=session.started_at,
        elapsed_seconds=session.elapsed_seconds(utcnow()),
    )


def _get_session_or_404(service: StudyService, session_id: str) -> StudySession:
    try:
        return service.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Study session not found")


def _review_result(review: FlashcardReviewState | None) -> CardReviewResult | None:
    if review is None:
        return None
    return CardReviewResult(
        card_id=review.card_id,
        repetitions=review.repetitions,
        correct_count=review.correct_count,
        incorrect_count=review.incorrect_count,
        last_reviewed=review.last_reviewed,
        next_review=review.next_review,
    )


def _deck_patch(deck_id: str, update: DeckStudyUpdate | None) -> DeckPatchResponse | None:
    if update is None:
        return None
    return DeckPatchResponse(
        id=deck_id,
        last_studied=update.last_studied,
        total_study_time=update.total_study_time,
        elapsed_seconds=update.elapsed_seconds,
    )


@router.post("/decks/{deck_id}", response_model=StudySessionResponse, status_code=status.HTTP_201_CREATED)
def start_session(deck_id: str, service: StudyService = Depends(get_study_service)):
    """
    Начать изучение колоды. Пустая колода сразу даёт статус empty.
    """
    try:
        session = service.start(deck_id)
    except DeckNotFoundError:
        raise HTTPException(status_code=404, detail="Deck not found")
    return _session_response(session)


@router.get("/{session_id}", response_model=StudySessionResponse)
def get_session(session_id: str, service: StudyService = Depends(get_study_service)):
    return _session_response(_get_session_or_404(service, session_id))


@router.post("/{session_id}/flip", response_model=StudySessionResponse)
def flip_card(session_id: str, service: StudyService = Depends(get_study_service)):
    try:
        session = service.flip(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Study session not found")
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _session_response(session)


@router.post("/{session_id}/answer", response_model=AnswerResponse)
def answer_card(
    session_id: str,
    request: AnswerRequest,
    service: StudyService = Depends(get_study_service),
):
    """
    Ответ на текущую карточку. На последней карточке сессия завершается
    и в deck_update приходит новое время занятий колоды.
    """
    try:
        outcome = service.answer(session_id, correct=request.correct)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Study session not found")
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return AnswerResponse(
        review=_review_result(outcome.review),
        session=_session_response(outcome.session),
        deck_update=_deck_patch(outcome.session.deck_id, outcome.deck_update),
    )


@router.post("/{session_id}/restart", response_model=StudySessionResponse)
def restart_session(session_id: str, service: StudyService = Depends(get_study_service)):
    try:
        session = service.restart(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Study session not found")
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except DeckNotFoundError:
        raise HTTPException(status_code=404, detail="Deck not found")
    return _session_response(session)


@router.delete("/{session_id}")
def discard_session(session_id: str, service: StudyService = Depends(get_study_service)):
    if not service.discard(session_id):
        raise HTTPException(status_code=404, detail="Study session not found")
    return {"message": "Study session discarded"}
