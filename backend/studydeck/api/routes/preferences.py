from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from studydeck.db.session import get_db
from studydeck.models.preference import Preference
from studydeck.schemas.preferences import PreferencesResponse, PreferencesUpdate

router = APIRouter(tags=["preferences"])


def _ensure_preferences(db: Session) -> Preference:
    prefs = db.get(Preference, 1)
    if prefs:
        return prefs
    prefs = Preference(id=1)
    db.add(prefs)
    db.commit()
    db.refresh(prefs)
    return prefs


@router.get("/", response_model=PreferencesResponse)
def get_preferences(db: Session = Depends(get_db)):
    return _ensure_preferences(db)


@router.put("/", response_model=PreferencesResponse)
def update_preferences(payload: PreferencesUpdate, db: Session = Depends(get_db)):
    prefs = _ensure_preferences(db)
    prefs.theme = payload.theme
    db.commit()
    db.refresh(prefs)
    return prefs
