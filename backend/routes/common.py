"""Shared bits for the request/response schemas of every router."""

from typing import Literal, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from services.subject_service import SubjectService

AICategory = Literal["math_science", "writing", "social_studies", "coding"]
EventType = Literal["assignment", "quiz", "test", "deadline"]


def reject_none(cls, value):
    """PATCH bodies may omit a required column, but may not null it out."""
    if value is None:
        raise ValueError("field cannot be null")
    return value


def require_subject(db: Session, subject_id: Optional[int]):
    """404 unless *subject_id* is unset or names an existing subject."""
    if subject_id is not None and not SubjectService.get_by_id(db, subject_id):
        raise HTTPException(status_code=404, detail="Subject not found")
