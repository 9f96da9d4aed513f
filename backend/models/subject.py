from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from database import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    color = Column(String(20), nullable=False)  # hex, e.g. #3B82F6
    ai_category = Column(String(30), nullable=True)  # math_science/writing/social_studies/coding
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # Events and tasks outlive their subject (FK is nulled); everything below cascades
    events = relationship("CalendarEvent", back_populates="subject")
    tasks = relationship("Task", back_populates="subject")
    conversations = relationship(
        "Conversation", back_populates="subject", cascade="all, delete-orphan"
    )
    preference = relationship(
        "LearningPreference", back_populates="subject", uselist=False, cascade="all, delete-orphan"
    )
    flashcard_sets = relationship(
        "FlashcardSet", back_populates="subject", cascade="all, delete-orphan"
    )
