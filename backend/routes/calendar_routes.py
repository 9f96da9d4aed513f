import logging
from datetime import date as date_type
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.orm import Session

from config import UPCOMING_EVENTS_LIMIT
from database import get_db
from routes.common import EventType, reject_none, require_subject
from services.calendar_service import CalendarService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/calendar", tags=["Calendar"])


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    description: Optional[str] = None
    date: date_type
    subject_id: Optional[int] = None
    event_type: EventType


class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    description: Optional[str] = None
    date: Optional[date_type] = None
    subject_id: Optional[int] = None
    event_type: Optional[EventType] = None

    check_not_null = field_validator("title", "date", "event_type")(reject_none)


class EventOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    date: date_type
    subject_id: Optional[int] = None
    event_type: str


@router.get("/upcoming", response_model=List[EventOut])
async def upcoming_events(
    limit: int = Query(UPCOMING_EVENTS_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
):
    try:
        return CalendarService.get_upcoming(db, limit=limit)
    except Exception:
        logger.exception("Failed to fetch upcoming events")
        raise HTTPException(status_code=500, detail="Failed to fetch upcoming events")


@router.get("/{year}/{month}", response_model=List[EventOut])
async def month_events(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    db: Session = Depends(get_db),
):
    try:
        return CalendarService.get_month(db, year, month)
    except Exception:
        logger.exception("Failed to fetch calendar events for %s-%s", year, month)
        raise HTTPException(status_code=500, detail="Failed to fetch calendar events")


@router.post("", response_model=EventOut, status_code=201)
async def create_event(body: EventCreate, db: Session = Depends(get_db)):
    try:
        require_subject(db, body.subject_id)
        return CalendarService.create(db, body.model_dump())
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create event")
        raise HTTPException(status_code=500, detail="Failed to create event")


@router.patch("/{event_id}", response_model=EventOut)
async def update_event(event_id: int, body: EventUpdate, db: Session = Depends(get_db)):
    try:
        data = body.model_dump(exclude_unset=True)
        require_subject(db, data.get("subject_id"))
        updated = CalendarService.update(db, event_id, data)
        if not updated:
            raise HTTPException(status_code=404, detail="Event not found")
        return updated
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to update event %s", event_id)
        raise HTTPException(status_code=500, detail="Failed to update event")


@router.delete("/{event_id}", status_code=204)
async def delete_event(event_id: int, db: Session = Depends(get_db)):
    try:
        if not CalendarService.delete(db, event_id):
            raise HTTPException(status_code=404, detail="Event not found")
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to delete event %s", event_id)
        raise HTTPException(status_code=500, detail="Failed to delete event")
