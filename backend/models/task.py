from sqlalchemy import Column, Integer, String, Boolean, Date, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    date = Column(Date, nullable=False, index=True)
    order = Column(Integer, nullable=False, default=0)  # position within the date, not global
    subject_id = Column(Integer, ForeignKey("subjects.id", ondelete="SET NULL"), nullable=True)

    subject = relationship("Subject", back_populates="tasks")
