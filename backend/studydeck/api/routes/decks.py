from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from studydeck.api.deps import get_repository
from studydeck.core.timeutils import utcnow
from studydeck.domain.review.queue import is_due
from studydeck.domain.statistics import format_study_time, is_mastered, mean_card_accuracy
from studydeck.models.deck import Deck
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.schemas.cards import CardResponse
from studydeck.schemas.decks import (
    DeckCreate,
    DeckDetail,
    DeckOverviewResponse,
    DeckSummary,
    DeckUpdate,
)

router = APIRouter(tags=["decks"])


def _summary_fields(deck: Deck, now) -> dict:
    return dict(
        id=deck.id,
        name=deck.name,
        subject=deck.subject,
        description=deck.description,
        color=deck.color,
        cards_count=len(deck.cards),
        due_count=sum(1 for card in deck.cards if is_due(card, now)),
        mastered_count=sum(1 for card in deck.cards if is_mastered(card)),
        accuracy=mean_card_accuracy(deck.cards),
        created_at=deck.created_at,
        last_studied=deck.last_studied,
        total_study_time=deck.total_study_time,
        is_ai_generated=deck.is_ai_generated,
    )


def _get_deck_or_404(repository: DeckRepository, deck_id: str) -> Deck:
    deck = repository.get_deck(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck


@router.get("/", response_model=List[DeckSummary])
def list_decks(repository: DeckRepository = Depends(get_repository)):
    """
    Все колоды (без карточек)
    """
    now = utcnow()
    return [DeckSummary(**_summary_fields(deck, now)) for deck in repository.list_decks()]


@router.get("/overview", response_model=DeckOverviewResponse)
def decks_overview(repository: DeckRepository = Depends(get_repository)):
    """
    Данные для главного экрана: карточки всего, к повторению, время занятий
    """
    now = utcnow()
    decks = repository.list_decks()
    summaries = [DeckSummary(**_summary_fields(deck, now)) for deck in decks]
    total_time = sum(deck.total_study_time for deck in decks)

    return DeckOverviewResponse(
        total_cards=sum(s.cards_count for s in summaries),
        due_cards=sum(s.due_count for s in summaries),
        total_study_time=total_time,
        formatted_study_time=format_study_time(total_time),
        decks=summaries,
    )


@router.post("/", response_model=DeckDetail, status_code=status.HTTP_201_CREATED)
def create_deck(payload: DeckCreate, repository: DeckRepository = Depends(get_repository)):
    name = payload.name.strip()
    subject = payload.subject.strip()
    if not name:
        raise HTTPException(status_code=422, detail="Name is required")
    if not subject:
        raise HTTPException(status_code=422, detail="Subject is required")

    deck = repository.create_deck(
        name=name,
        subject=subject,
        description=payload.description,
        color=payload.color,
    )
    return DeckDetail(**_summary_fields(deck, utcnow()), cards=[])


@router.get("/{deck_id}", response_model=DeckDetail)
def get_deck(deck_id: str, repository: DeckRepository = Depends(get_repository)):
    deck = _get_deck_or_404(repository, deck_id)
    return DeckDetail(
        **_summary_fields(deck, utcnow()),
        cards=[CardResponse.model_validate(card) for card in deck.cards],
    )


@router.put("/{deck_id}", response_model=DeckDetail)
def update_deck(
    deck_id: str,
    payload: DeckUpdate,
    repository: DeckRepository = Depends(get_repository),
):
    deck = _get_deck_or_404(repository, deck_id)

    update_data = payload.model_dump(exclude_unset=True)
    for field in ("name", "subject"):
        if field in update_data:
            value = (update_data[field] or "").strip()
            if not value:
                raise HTTPException(status_code=422, detail=f"{field.capitalize()} is required")
            update_data[field] = value
    # description и color в БД NOT NULL: явный null просто пропускаем
    for field in ("description", "color"):
        if field in update_data and update_data[field] is None:
            update_data.pop(field)

    deck = repository.update_deck(deck, **update_data)
    return DeckDetail(
        **_summary_fields(deck, utcnow()),
        cards=[CardResponse.model_validate(card) for card in deck.cards],
    )


@router.delete("/{deck_id}")
def delete_deck(deck_id: str, repository: DeckRepository = Depends(get_repository)):
    """Удалить колоду и все её карточки"""
    deck = _get_deck_or_404(repository, deck_id)
    repository.delete_deck(deck)
    return {"message": "Deck and its cards deleted successfully"}
