import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

import studydeck.models  # noqa: F401  регистрирует таблицы в Base.metadata
from studydeck.api.routes import backup, cards, decks, preferences, statistics, study
from studydeck.core.config import settings
from studydeck.core.logging import configure_logging
from studydeck.core.timeutils import utcnow
from studydeck.db.base import Base
from studydeck.db.session import SessionLocal, engine
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.services.sample_decks import seed_sample_decks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    Base.metadata.create_all(bind=engine)

    if settings.SEED_SAMPLE_DECKS:
        db = SessionLocal()
        try:
            seed_sample_decks(DeckRepository(db))
        finally:
            db.close()

    logger.info("StudyDeck API started")
    yield


app = FastAPI(
    title="StudyDeck API",
    version="1.0.0",
    description="Flashcard decks with spaced repetition study sessions",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(decks.router, prefix="/api/decks", tags=["decks"])
app.include_router(cards.router, prefix="/api/decks", tags=["cards"])
app.include_router(study.router, prefix="/api/study", tags=["study"])
app.include_router(statistics.router, prefix="/api/statistics", tags=["statistics"])
app.include_router(preferences.router, prefix="/api/preferences", tags=["preferences"])
app.include_router(backup.router, prefix="/api/backup", tags=["backup"])


@app.get("/api/health")
def health_check():
    return {"status": "ok", "timestamp": utcnow().isoformat()}
