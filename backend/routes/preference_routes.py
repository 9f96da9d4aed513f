import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from database import get_db
from routes.common import require_subject
from services.preference_service import PreferenceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/preferences", tags=["Preferences"])


class PreferenceUpsert(BaseModel):
    subject_id: int
    # Free text on purpose: values the tutor does not know are stored but ignored
    explanation_style: Optional[str] = Field(default=None, max_length=30)
    complexity_level: Optional[str] = Field(default=None, max_length=20)
    custom_instructions: Optional[str] = None


class PreferenceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subject_id: int
    explanation_style: Optional[str] = None
    complexity_level: Optional[str] = None
    custom_instructions: Optional[str] = None
    updated_at: datetime


@router.get("/{subject_id}", response_model=Optional[PreferenceOut])
async def get_preference(subject_id: int, db: Session = Depends(get_db)):
    """The subject's preference, or JSON null when none has been saved."""
    try:
        return PreferenceService.get_by_subject(db, subject_id)
    except Exception:
        logger.exception("Failed to fetch learning preferences for subject %s", subject_id)
        raise HTTPException(status_code=500, detail="Failed to fetch learning preferences")


@router.put("", response_model=PreferenceOut)
async def upsert_preference(body: PreferenceUpsert, db: Session = Depends(get_db)):
    try:
        require_subject(db, body.subject_id)
        return PreferenceService.upsert(db, body.model_dump())
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to save learning preferences")
        raise HTTPException(status_code=500, detail="Failed to save learning preferences")
