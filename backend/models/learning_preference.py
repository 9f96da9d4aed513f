from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


class LearningPreference(Base):
    __tablename__ = "learning_preferences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    subject_id = Column(
        Integer, ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    explanation_style = Column(String(30), nullable=True)  # step_by_step/analogies/visual_examples/concise/socratic
    complexity_level = Column(String(20), nullable=True)  # beginner/intermediate/advanced
    custom_instructions = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    subject = relationship("Subject", back_populates="preference")
