from datetime import timedelta

from fastapi import Depends
from sqlalchemy.orm import Session

from studydeck.core.config import settings
from studydeck.db.session import get_db
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.services.study_service import StudyService, StudySessionRegistry

# сессии изучения общие для всех запросов процесса
session_registry = StudySessionRegistry(
    ttl=timedelta(minutes=settings.STUDY_SESSION_TTL_MINUTES),
)


def get_repository(db: Session = Depends(get_db)) -> DeckRepository:
    return DeckRepository(db)


def get_session_registry() -> StudySessionRegistry:
    return session_registry


def get_study_service(
    repository: DeckRepository = Depends(get_repository),
    registry: StudySessionRegistry = Depends(get_session_registry),
) -> StudyService:
    return StudyService(repository, registry)
