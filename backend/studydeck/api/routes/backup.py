import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from studydeck.api.deps import get_repository, get_session_registry
from studydeck.core.timeutils import utcnow
from studydeck.repositories.deck_repository import DeckRepository
from studydeck.schemas.backup import ImportResult
from studydeck.services.backup_service import backup_filename, export_decks, import_decks
from studydeck.services.study_service import StudySessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["backup"])


@router.get("/export")
def export_backup(repository: DeckRepository = Depends(get_repository)):
    """Скачать все колоды и карточки одним JSON"""
    filename = backup_filename(utcnow())
    return JSONResponse(
        content=export_decks(repository),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult)
def import_backup(
    payload: Any = Body(...),
    repository: DeckRepository = Depends(get_repository),
    registry: StudySessionRegistry = Depends(get_session_registry),
):
    try:
        result = import_decks(repository, payload)
    except ValidationError as e:
        logger.warning("Rejected backup: %d validation errors", e.error_count())
        raise HTTPException(status_code=422, detail="Invalid backup document")
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    # старые сессии ссылаются на заменённые карточки
    registry.clear()
    return result


@router.delete("/")
def clear_data(
    repository: DeckRepository = Depends(get_repository),
    registry: StudySessionRegistry = Depends(get_session_registry),
):
    repository.clear()
    registry.clear()
    return {"message": "All data cleared"}
