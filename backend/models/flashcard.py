from sqlalchemy import Column, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


class Flashcard(Base):
    __tablename__ = "flashcards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    set_id = Column(
        Integer, ForeignKey("flashcard_sets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    front = Column(Text, nullable=False)
    back = Column(Text, nullable=False)
    order = Column(Integer, nullable=False, default=0)  # position within the set

    flashcard_set = relationship("FlashcardSet", back_populates="cards")
