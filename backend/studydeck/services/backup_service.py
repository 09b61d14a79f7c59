import logging
from datetime import datetime

from pydantic import TypeAdapter

from studydeck.models.deck import Deck
from studydeck.models.flashcard import Flashcard
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.schemas.backup import CardBackup, DeckBackup, ImportResult

logger = logging.getLogger(__name__)

backup_adapter = TypeAdapter(list[DeckBackup])


def backup_filename(now: datetime) -> str:
    return f"flashcard-backup-{now.date().isoformat()}.json"


def _to_backup(deck: Deck) -> DeckBackup:
    return DeckBackup(
        id=deck.id,
        name=deck.name,
        subject=deck.subject,
        description=deck.description,
        color=deck.color,
        created_at=deck.created_at,
        last_studied=deck.last_studied,
        total_study_time=deck.total_study_time,
        is_ai_generated=deck.is_ai_generated,
        cards=[
            CardBackup(
                id=card.id,
                question=card.question,
                answer=card.answer,
                difficulty=card.difficulty,
                repetitions=card.repetitions,
                correct_count=card.correct_count,
                incorrect_count=card.incorrect_count,
                last_reviewed=card.last_reviewed,
                next_review=card.next_review,
            )
            for card in deck.cards
        ],
    )


def export_decks(repository: DeckRepository) -> list[dict]:
    """Вся коллекция одним документом, даты строками ISO 8601."""
    decks = [_to_backup(deck) for deck in repository.list_decks()]
    return backup_adapter.dump_python(decks, mode="json", by_alias=True)


def _to_model(backup: DeckBackup) -> Deck:
    return Deck(
        id=backup.id,
        name=backup.name,
        subject=backup.subject,
        description=backup.description,
        color=backup.color,
        created_at=backup.created_at,
        last_studied=backup.last_studied,
        total_study_time=backup.total_study_time,
        is_ai_generated=backup.is_ai_generated,
        cards=[
            Flashcard(
                id=card.id,
                position=position,
                question=card.question,
                answer=card.answer,
                difficulty=card.difficulty,
                repetitions=card.repetitions,
                correct_count=card.correct_count,
                incorrect_count=card.incorrect_count,
                last_reviewed=card.last_reviewed,
                next_review=card.next_review,
            )
            for position, card in enumerate(backup.cards)
        ],
    )


def _check_unique_ids(decks: list[DeckBackup]):
    deck_ids = [deck.id for deck in decks]
    if len(deck_ids) != len(set(deck_ids)):
        raise ValueError("Duplicate deck id in backup")

    card_ids = [card.id for deck in decks for card in deck.cards]
    if len(card_ids) != len(set(card_ids)):
        raise ValueError("Duplicate card id in backup")


def import_decks(repository: DeckRepository, payload) -> ImportResult:
    """
    Заменить коллекцию содержимым резервной копии.
    Невалидный документ отклоняется целиком, текущие данные не трогаем.
    """
    decks = backup_adapter.validate_python(payload)
    _check_unique_ids(decks)

    repository.replace_all([_to_model(deck) for deck in decks])

    result = ImportResult(
        decks=len(decks),
        cards=sum(len(deck.cards) for deck in decks),
    )
    logger.info("Imported %d decks with %d cards", result.decks, result.cards)
    return result
