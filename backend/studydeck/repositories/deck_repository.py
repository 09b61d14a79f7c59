import logging

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, selectinload

from studydeck.core.enums import Difficulty
from studydeck.core.timeutils import ensure_utc
from studydeck.domain.review.dto import DeckStudyUpdate
from studydeck.domain.review.entities import FlashcardReviewState
from studydeck.domain.study.session import StudyCard
from studydeck.models.deck import Deck
from studydeck.models.flashcard import Flashcard

logger = logging.getLogger(__name__)


class DeckRepository:
    """
    Хранилище колод и карточек.

    Каждый изменяющий метод сам делает commit, чтобы следующее чтение
    видело уже записанные данные.
    """

    def __init__(self, db: Session):
        self.db = db

    # -----------
    # Decks
    # -----------

    def list_decks(self) -> list[Deck]:
        stmt = (
            select(Deck)
            .options(selectinload(Deck.cards))
            .order_by(Deck.created_at.asc())
        )
        return list(self.db.scalars(stmt).all())

    def get_deck(self, deck_id: str) -> Deck | None:
        stmt = (
            select(Deck)
            .options(selectinload(Deck.cards))
            .where(Deck.id == deck_id)
        )
        return self.db.scalars(stmt).first()

    def create_deck(
            self,
            *,
            name: str,
            subject: str,
            description: str = "",
            color: str = "bg-blue-500",
            is_ai_generated: bool = False,
    ) -> Deck:
        deck = Deck(
            name=name,
            subject=subject,
            description=description,
            color=color,
            is_ai_generated=is_ai_generated,
        )
        self.db.add(deck)
        self.db.commit()
        self.db.refresh(deck)

        logger.info("Created deck %s (%s)", deck.id, deck.name)
        return deck

    def update_deck(self, deck: Deck, **fields) -> Deck:
        for key, value in fields.items():
            setattr(deck, key, value)
        self.db.commit()
        self.db.refresh(deck)
        return deck

    def delete_deck(self, deck: Deck):
        self.db.delete(deck)
        self.db.commit()
        logger.info("Deleted deck %s", deck.id)

    def apply_study_update(self, deck_id: str, update: DeckStudyUpdate) -> Deck | None:
        deck = self.db.get(Deck, deck_id)
        if deck is None:
            # колоду могли удалить, пока шла сессия
            logger.warning("Deck %s is gone, study time not saved", deck_id)
            return None

        deck.last_studied = update.last_studied
        deck.total_study_time = update.total_study_time
        self.db.commit()
        self.db.refresh(deck)
        return deck

    # -----------
    # Cards
    # -----------

    def get_card(self, deck_id: str, card_id: str) -> Flashcard | None:
        stmt = select(Flashcard).where(
            Flashcard.id == card_id,
            Flashcard.deck_id == deck_id,
        )
        return self.db.scalars(stmt).first()

    def add_card(
            self,
            deck: Deck,
            *,
            question: str,
            answer: str,
            difficulty: Difficulty = Difficulty.medium,
    ) -> Flashcard:
        last_position = self.db.scalar(
            select(func.max(Flashcard.position)).where(Flashcard.deck_id == deck.id)
        )
        card = Flashcard(
            deck_id=deck.id,
            position=0 if last_position is None else last_position + 1,
            question=question,
            answer=answer,
            difficulty=difficulty,
            repetitions=0,
            correct_count=0,
            incorrect_count=0,
        )
        self.db.add(card)
        self.db.commit()
        self.db.refresh(card)
        return card

    def update_card(self, card: Flashcard, **fields) -> Flashcard:
        for key, value in fields.items():
            setattr(card, key, value)
        self.db.commit()
        self.db.refresh(card)
        return card

    def delete_card(self, card: Flashcard):
        self.db.delete(card)
        self.db.commit()

    # -----------
    # Study
    # -----------

    def load_study_cards(self, deck: Deck) -> list[StudyCard]:
        return [
            StudyCard(
                id=card.id,
                question=card.question,
                answer=card.answer,
                difficulty=card.difficulty,
                next_review=ensure_utc(card.next_review),
            )
            for card in deck.cards
        ]

    def load_review_state(self, card_id: str) -> FlashcardReviewState | None:
        card = self.db.get(Flashcard, card_id)
        if card is None:
            return None

        return FlashcardReviewState(
            card_id=card.id,
            repetitions=card.repetitions,
            correct_count=card.correct_count,
            incorrect_count=card.incorrect_count,
            last_reviewed=ensure_utc(card.last_reviewed),
            next_review=ensure_utc(card.next_review),
        )

    def save_review_state(self, state: FlashcardReviewState) -> Flashcard | None:
        card = self.db.get(Flashcard, state.card_id)
        if card is None:
            logger.warning("Card %s is gone, review not saved", state.card_id)
            return None

        card.repetitions = state.repetitions
        card.correct_count = state.correct_count
        card.incorrect_count = state.incorrect_count
        card.last_reviewed = state.last_reviewed
        card.next_review = state.next_review
        self.db.commit()
        return card

    # -----------
    # Bulk
    # -----------

    def replace_all(self, decks: list[Deck]):
        """Заменить всю коллекцию одним commit (импорт резервной копии)."""
        self.db.execute(delete(Flashcard))
        self.db.execute(delete(Deck))
        self.db.expunge_all()
        self.db.add_all(decks)
        self.db.commit()

    def clear(self):
        self.db.execute(delete(Flashcard))
        self.db.execute(delete(Deck))
        self.db.commit()
        logger.info("All decks cleared")

    def is_empty(self) -> bool:
        return self.db.scalar(select(func.count()).select_from(Deck)) == 0
