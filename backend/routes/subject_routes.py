import logging
from datetime import datetime
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from database import get_db
from routes.common import AICategory, reject_none
from services.subject_service import SubjectService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/subjects", tags=["Subjects"])

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


class SubjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    color: str = Field(pattern=HEX_COLOR)
    ai_category: Optional[AICategory] = None


class SubjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    ai_category: Optional[AICategory] = None

    check_not_null = field_validator("name", "color")(reject_none)


class SubjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str
    ai_category: Optional[str] = None
    created_at: datetime


@router.get("", response_model=List[SubjectOut])
async def list_subjects(db: Session = Depends(get_db)):
    try:
        return SubjectService.get_all(db)
    except Exception:
        logger.exception("Failed to fetch subjects")
        raise HTTPException(status_code=500, detail="Failed to fetch subjects")


@router.post("", response_model=SubjectOut, status_code=201)
async def create_subject(body: SubjectCreate, db: Session = Depends(get_db)):
    try:
        return SubjectService.create(db, body.model_dump())
    except Exception:
        logger.exception("Failed to create subject")
        raise HTTPException(status_code=500, detail="Failed to create subject")


@router.patch("/{subject_id}", response_model=SubjectOut)
async def update_subject(subject_id: int, body: SubjectUpdate, db: Session = Depends(get_db)):
    try:
        updated = SubjectService.update(db, subject_id, body.model_dump(exclude_unset=True))
        if not updated:
            raise HTTPException(status_code=404, detail="Subject not found")
        return updated
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to update subject %s", subject_id)
        raise HTTPException(status_code=500, detail="Failed to update subject")


@router.delete("/{subject_id}", status_code=204)
async def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    try:
        if not SubjectService.delete(db, subject_id):
            raise HTTPException(status_code=404, detail="Subject not found")
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to delete subject %s", subject_id)
        raise HTTPException(status_code=500, detail="Failed to delete subject")
