# backend/studydeck/api/routes/cards.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from starlette import status

from studydeck.api.deps import get_repository
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.schemas.cards import CardCreate, CardResponse, CardUpdate

router = APIRouter(tags=["cards"])


def _get_deck_or_404(repository: DeckRepository, deck_id: str):
    deck = repository.get_deck(deck_id)
    if not deck:
        raise HTTPException(status_code=404, detail="Deck not found")
    return deck


def _get_card_or_404(repository: DeckRepository, deck_id: str, card_id: str):
    card = repository.get_card(deck_id, card_id)
    if not card:
        raise HTTPException(status_code=404, detail="Card not found")
    return card


@router.get("/{deck_id}/cards", response_model=List[CardResponse])
def list_deck_cards(deck_id: str, repository: DeckRepository = Depends(get_repository)):
    """
    Карточки колоды в порядке добавления
    """
    deck = _get_deck_or_404(repository, deck_id)
    return deck.cards


@router.post("/{deck_id}/cards", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
def create_card(
    deck_id: str,
    payload: CardCreate,
    repository: DeckRepository = Depends(get_repository),
):
    deck = _get_deck_or_404(repository, deck_id)

    question = payload.question.strip()
    answer = payload.answer.strip()
    if not question or not answer:
        raise HTTPException(status_code=422, detail="Question and answer must be non-empty")

    # новая карточка без истории: к повторению сразу
    return repository.add_card(
        deck,
        question=question,
        answer=answer,
        difficulty=payload.difficulty,
    )


@router.put("/{deck_id}/cards/{card_id}", response_model=CardResponse)
def update_card(
    deck_id: str,
    card_id: str,
    payload: CardUpdate,
    repository: DeckRepository = Depends(get_repository),
):
    card = _get_card_or_404(repository, deck_id, card_id)

    # статистику повторений правкой текста не трогаем
    update_data = payload.model_dump(exclude_unset=True)
    for field in ("question", "answer"):
        if field in update_data:
            value = (update_data[field] or "").strip()
            if not value:
                raise HTTPException(status_code=422, detail="Question and answer must be non-empty")
            update_data[field] = value
    if update_data.get("difficulty", ...) is None:
        update_data.pop("difficulty")

    return repository.update_card(card, **update_data)


@router.delete("/{deck_id}/cards/{card_id}")
def delete_card(
    deck_id: str,
    card_id: str,
    repository: DeckRepository = Depends(get_repository),
):
    card = _get_card_or_404(repository, deck_id, card_id)
    repository.delete_card(card)
    return {"message": "Card deleted successfully"}
