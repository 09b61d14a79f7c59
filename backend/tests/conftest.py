"""Pytest fixtures: SQLite в памяти вместо настоящей базы."""
import logging
import warnings
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Отключаем SQLAlchemy логирование
logging.getLogger("sqlalchemy").setLevel(logging.ERROR)
logging.getLogger("sqlalchemy.engine").setLevel(logging.ERROR)

warnings.filterwarnings("ignore", category=DeprecationWarning)

import studydeck.models  # noqa: E402,F401
from studydeck.api.deps import session_registry  # noqa: E402
from studydeck.db.base import Base  # noqa: E402
from studydeck.db.session import get_db  # noqa: E402
from studydeck.main import app  # noqa: E402
from studydeck.models.deck import Deck  # noqa: E402
from studydeck.models.flashcard import Flashcard  # noqa: E402
from studydeck.repositories.deck_repository import DeckRepository  # noqa: E402


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    db = TestingSession()
    yield db
    db.close()


@pytest.fixture(scope="function")
def client(db) -> TestClient:
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides = {}
    session_registry.clear()


@pytest.fixture
def repository(db) -> DeckRepository:
    return DeckRepository(db)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 11, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def test_deck(db) -> Deck:
    deck = Deck(
        name="Biology Basics",
        subject="Biology",
        description="Fundamental concepts in biology",
        color="bg-green-500",
    )
    db.add(deck)
    db.commit()
    db.refresh(deck)
    return deck


@pytest.fixture
def deck_with_cards(db, test_deck) -> Deck:
    """Две карточки к повторению и одна на будущее."""
    future = datetime.now(timezone.utc) + timedelta(days=5)
    db.add_all([
        Flashcard(deck_id=test_deck.id, position=0, question="What is DNA?", answer="Deoxyribonucleic acid"),
        Flashcard(deck_id=test_deck.id, position=1, question="What is RNA?", answer="Ribonucleic acid"),
        Flashcard(
            deck_id=test_deck.id,
            position=2,
            question="What is ATP?",
            answer="Adenosine triphosphate",
            repetitions=2,
            correct_count=2,
            incorrect_count=0,
            last_reviewed=future - timedelta(days=3),
            next_review=future,
        ),
    ])
    db.commit()
    db.refresh(test_deck)
    return test_deck
