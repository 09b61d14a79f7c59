from studydeck.core.logging import configure_logging
from studydeck.db.base import Base
from studydeck.db.session import SessionLocal, engine
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.services.sample_decks import seed_sample_decks
import studydeck.models  # noqa: F401

configure_logging()
Base.metadata.create_all(bind=engine)

db = SessionLocal()
try:
    if seed_sample_decks(DeckRepository(db)):
        print("Тестовые колоды добавлены")
    else:
        print("База не пустая, пропускаем")
finally:
    db.close()
