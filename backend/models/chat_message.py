from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database import Base


class ChatMessage(Base):
    __tablename__ = "chat_messages"
    # AUTOINCREMENT keeps sequence values from being reused after deletes
    __table_args__ = {"sqlite_autoincrement": True}

    # Store-assigned and strictly increasing; the only ordering key for messages
    sequence = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(
        Integer, ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role = Column(String(20), nullable=False)  # user/assistant
    content = Column(Text, nullable=False)
    # Display only, never sorted on
    timestamp = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    conversation = relationship("Conversation", back_populates="messages")
