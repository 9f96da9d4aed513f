import logging
from datetime import datetime
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from database import get_db
from routes.common import reject_none, require_subject
from services.flashcard_service import FlashcardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/flashcards", tags=["Flashcards"])


class FlashcardSetCreate(BaseModel):
    subject_id: int
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None


class FlashcardSetUpdate(BaseModel):
    subject_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None

    check_not_null = field_validator("subject_id", "title")(reject_none)


class FlashcardSetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subject_id: int
    title: str
    description: Optional[str] = None
    created_at: datetime


class FlashcardCreate(BaseModel):
    set_id: int
    front: str = Field(min_length=1)
    back: str = Field(min_length=1)
    order: Optional[int] = Field(default=None, ge=0)  # omitted → appended to the set


class FlashcardUpdate(BaseModel):
    front: Optional[str] = Field(default=None, min_length=1)
    back: Optional[str] = Field(default=None, min_length=1)
    order: Optional[int] = Field(default=None, ge=0)

    check_not_null = field_validator("front", "back", "order")(reject_none)


class FlashcardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    set_id: int
    front: str
    back: str
    order: int


# ── Sets (declared before /{set_id} so "sets" is never read as an id) ──
@router.get("/sets", response_model=List[FlashcardSetOut])
async def list_sets(db: Session = Depends(get_db)):
    try:
        return FlashcardService.get_all_sets(db)
    except Exception:
        logger.exception("Failed to fetch flashcard sets")
        raise HTTPException(status_code=500, detail="Failed to fetch flashcard sets")


@router.get("/sets/subject/{subject_id}", response_model=List[FlashcardSetOut])
async def list_sets_for_subject(subject_id: int, db: Session = Depends(get_db)):
    try:
        return FlashcardService.get_sets_by_subject(db, subject_id)
    except Exception:
        logger.exception("Failed to fetch flashcard sets for subject %s", subject_id)
        raise HTTPException(status_code=500, detail="Failed to fetch flashcard sets")


@router.post("/sets", response_model=FlashcardSetOut, status_code=201)
async def create_set(body: FlashcardSetCreate, db: Session = Depends(get_db)):
    try:
        require_subject(db, body.subject_id)
        return FlashcardService.create_set(db, body.model_dump())
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create flashcard set")
        raise HTTPException(status_code=500, detail="Failed to create flashcard set")


@router.patch("/sets/{set_id}", response_model=FlashcardSetOut)
async def update_set(set_id: int, body: FlashcardSetUpdate, db: Session = Depends(get_db)):
    try:
        data = body.model_dump(exclude_unset=True)
        require_subject(db, data.get("subject_id"))
        updated = FlashcardService.update_set(db, set_id, data)
        if not updated:
            raise HTTPException(status_code=404, detail="Flashcard set not found")
        return updated
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to update flashcard set %s", set_id)
        raise HTTPException(status_code=500, detail="Failed to update flashcard set")


@router.delete("/sets/{set_id}", status_code=204)
async def delete_set(set_id: int, db: Session = Depends(get_db)):
    try:
        if not FlashcardService.delete_set(db, set_id):
            raise HTTPException(status_code=404, detail="Flashcard set not found")
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to delete flashcard set %s", set_id)
        raise HTTPException(status_code=500, detail="Failed to delete flashcard set")


# ── Cards ─────────────────────────────────────────────────────────
@router.get("/{set_id}", response_model=List[FlashcardOut])
async def list_cards(set_id: int, db: Session = Depends(get_db)):
    try:
        return FlashcardService.get_cards(db, set_id)
    except Exception:
        logger.exception("Failed to fetch flashcards for set %s", set_id)
        raise HTTPException(status_code=500, detail="Failed to fetch flashcards")


@router.post("", response_model=FlashcardOut, status_code=201)
async def create_card(body: FlashcardCreate, db: Session = Depends(get_db)):
    try:
        if not FlashcardService.get_set(db, body.set_id):
            raise HTTPException(status_code=404, detail="Flashcard set not found")
        return FlashcardService.create_card(db, body.model_dump())
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create flashcard")
        raise HTTPException(status_code=500, detail="Failed to create flashcard")


@router.patch("/{card_id}", response_model=FlashcardOut)
async def update_card(card_id: int, body: FlashcardUpdate, db: Session = Depends(get_db)):
    try:
        updated = FlashcardService.update_card(db, card_id, body.model_dump(exclude_unset=True))
        if not updated:
            raise HTTPException(status_code=404, detail="Flashcard not found")
        return updated
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to update flashcard %s", card_id)
        raise HTTPException(status_code=500, detail="Failed to update flashcard")


@router.delete("/{card_id}", status_code=204)
async def delete_card(card_id: int, db: Session = Depends(get_db)):
    try:
        if not FlashcardService.delete_card(db, card_id):
            raise HTTPException(status_code=404, detail="Flashcard not found")
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to delete flashcard %s", card_id)
        raise HTTPException(status_code=500, detail="Failed to delete flashcard")
