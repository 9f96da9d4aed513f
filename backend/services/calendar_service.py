"""
calendar_service.py — Calendar events
Month views, the upcoming-events feed and plain CRUD.
"""

import calendar
from datetime import date, datetime, timezone

from sqlalchemy.orm import Session

from config import UPCOMING_EVENTS_LIMIT
from models.calendar_event import CalendarEvent


class CalendarService:
    @staticmethod
    def get_month(db: Session, year: int, month: int) -> list[CalendarEvent]:
        """Events falling in the given month, sorted by date."""
        first_day = date(year, month, 1)
        last_day = date(year, month, calendar.monthrange(year, month)[1])
        return (
            db.query(CalendarEvent)
            .filter(CalendarEvent.date >= first_day, CalendarEvent.date <= last_day)
            .order_by(CalendarEvent.date, CalendarEvent.id)
            .all()
        )

    @staticmethod
    def get_upcoming(
        db: Session, limit: int = UPCOMING_EVENTS_LIMIT, today: date | None = None
    ) -> list[CalendarEvent]:
        """Events dated today or later, soonest first."""
        today = today or datetime.now(timezone.utc).date()
        return (
            db.query(CalendarEvent)
            .filter(CalendarEvent.date >= today)
            .order_by(CalendarEvent.date, CalendarEvent.id)
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_by_id(db: Session, event_id: int) -> CalendarEvent | None:
        return db.get(CalendarEvent, event_id)

    @staticmethod
    def create(db: Session, data: dict) -> CalendarEvent:
        try:
            event = CalendarEvent(
                title=data["title"],
                description=data.get("description"),
                date=data["date"],
                subject_id=data.get("subject_id"),
                event_type=data["event_type"],
            )
            db.add(event)
            db.commit()
            db.refresh(event)
            return event
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def update(db: Session, event_id: int, data: dict) -> CalendarEvent | None:
        try:
            event = CalendarService.get_by_id(db, event_id)
            if not event:
                return None

            for key, value in data.items():
                if hasattr(event, key):
                    setattr(event, key, value)

            db.commit()
            db.refresh(event)
            return event
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete(db: Session, event_id: int) -> bool:
        try:
            event = CalendarService.get_by_id(db, event_id)
            if not event:
                return False
            db.delete(event)
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise
