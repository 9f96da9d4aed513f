"""
study_service.py — Tutoring conversations and their messages.
Messages are always read back by store-assigned sequence; timestamps are
carried along for display only.
"""

from datetime import datetime, timezone

from sqlalchemy import desc
from sqlalchemy.orm import Session

from config import CHAT_HISTORY_LIMIT
from models.chat_message import ChatMessage
from models.conversation import Conversation


class StudyService:
    # ── Conversations ────────────────────────────────────────────────
    @staticmethod
    def get_conversations(db: Session, subject_id: int) -> list[Conversation]:
        """Conversations for a subject, newest first."""
        return (
            db.query(Conversation)
            .filter(Conversation.subject_id == subject_id)
            .order_by(desc(Conversation.created_at), desc(Conversation.id))
            .all()
        )

    @staticmethod
    def get_conversation(db: Session, conversation_id: int) -> Conversation | None:
        return db.get(Conversation, conversation_id)

    @staticmethod
    def create_conversation(db: Session, data: dict) -> Conversation:
        try:
            convo = Conversation(subject_id=data["subject_id"], title=data["title"])
            db.add(convo)
            db.commit()
            db.refresh(convo)
            return convo
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def delete_conversation(db: Session, conversation_id: int) -> bool:
        """Delete a conversation together with all of its messages."""
        try:
            convo = StudyService.get_conversation(db, conversation_id)
            if not convo:
                return False
            db.delete(convo)
            db.commit()
            return True
        except Exception:
            db.rollback()
            raise

    # ── Messages ─────────────────────────────────────────────────────
    @staticmethod
    def get_messages(
        db: Session, conversation_id: int, limit: int = CHAT_HISTORY_LIMIT
    ) -> list[ChatMessage]:
        """The latest *limit* messages of a conversation, oldest first."""
        latest = (
            db.query(ChatMessage)
            .filter(ChatMessage.conversation_id == conversation_id)
            .order_by(desc(ChatMessage.sequence))
            .limit(limit)
            .all()
        )
        latest.reverse()
        return latest

    @staticmethod
    def create_message(
        db: Session,
        conversation_id: int,
        role: str,
        content: str,
        timestamp: datetime | None = None,
    ) -> ChatMessage:
        """Persist one chat turn. The sequence number is assigned on insert."""
        try:
            message = ChatMessage(
                conversation_id=conversation_id,
                role=role,
                content=content,
                timestamp=timestamp or datetime.now(timezone.utc),
            )
            db.add(message)
            db.commit()
            db.refresh(message)
            return message
        except Exception:
            db.rollback()
            raise
