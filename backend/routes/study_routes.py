import logging
from datetime import datetime
from typing import Optional, List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from config import CHAT_HISTORY_LIMIT
from database import get_db
from routes.common import AICategory, require_subject
from services.preference_service import PreferenceService
from services.study_service import StudyService
from services.subject_service import SubjectService
from services.tutor_service import TutorService, TutorServiceError, get_tutor_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/study", tags=["Study"])


# ── Pydantic schemas ──────────────────────────────────────────────
class ConversationCreate(BaseModel):
    subject_id: int
    title: str = Field(min_length=1, max_length=200)


class ConversationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subject_id: int
    title: str
    created_at: datetime


class ChatMessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sequence: int
    conversation_id: int
    role: str
    content: str
    timestamp: datetime


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    conversation_id: int
    subject_id: int
    ai_category: Optional[AICategory] = None  # falls back to the subject's category
    message: str = Field(min_length=1)
    history: List[ChatTurn] = []  # prior turns, oldest first, without `message`


class ChatReply(BaseModel):
    reply: str


# ── Conversations ─────────────────────────────────────────────────
@router.get("/conversations/{subject_id}", response_model=List[ConversationOut])
async def list_conversations(subject_id: int, db: Session = Depends(get_db)):
    try:
        return StudyService.get_conversations(db, subject_id)
    except Exception:
        logger.exception("Failed to fetch conversations for subject %s", subject_id)
        raise HTTPException(status_code=500, detail="Failed to fetch conversations")


@router.post("/conversations", response_model=ConversationOut, status_code=201)
async def create_conversation(body: ConversationCreate, db: Session = Depends(get_db)):
    try:
        require_subject(db, body.subject_id)
        return StudyService.create_conversation(db, body.model_dump())
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to create conversation")
        raise HTTPException(status_code=500, detail="Failed to create conversation")


@router.delete("/conversations/{conversation_id}", status_code=204)
async def delete_conversation(conversation_id: int, db: Session = Depends(get_db)):
    try:
        if not StudyService.delete_conversation(db, conversation_id):
            raise HTTPException(status_code=404, detail="Conversation not found")
        return Response(status_code=204)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Failed to delete conversation %s", conversation_id)
        raise HTTPException(status_code=500, detail="Failed to delete conversation")


# ── Messages ──────────────────────────────────────────────────────
@router.get("/messages/{conversation_id}", response_model=List[ChatMessageOut])
async def list_messages(
    conversation_id: int,
    limit: int = Query(CHAT_HISTORY_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
):
    try:
        return StudyService.get_messages(db, conversation_id, limit=limit)
    except Exception:
        logger.exception("Failed to fetch messages for conversation %s", conversation_id)
        raise HTTPException(status_code=500, detail="Failed to fetch chat messages")


@router.post("/chat", response_model=ChatReply)
async def chat(
    body: ChatRequest,
    db: Session = Depends(get_db),
    tutor: TutorService = Depends(get_tutor_service),
):
    """Run one tutoring turn.

    The student's message is committed before the provider is called and the
    reply only after it returns, so a failed call leaves just the user turn.
    """
    conversation = StudyService.get_conversation(db, body.conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    subject = SubjectService.get_by_id(db, body.subject_id)
    if not subject:
        raise HTTPException(status_code=404, detail="Subject not found")

    category = body.ai_category or subject.ai_category
    if not category:
        raise HTTPException(status_code=400, detail="Subject has no tutoring category")

    try:
        StudyService.create_message(db, conversation.id, "user", body.message)

        preferences = PreferenceService.get_by_subject(db, subject.id)
        turns = [t.model_dump() for t in body.history]
        turns.append({"role": "user", "content": body.message})
        reply = await tutor.get_chat_response(category, turns, preferences)

        StudyService.create_message(db, conversation.id, "assistant", reply)
        return {"reply": reply}
    except TutorServiceError as e:
        logger.error(f"Tutor error in conversation {conversation.id}: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)
    except Exception:
        logger.exception("Chat API error in conversation %s", conversation.id)
        raise HTTPException(status_code=500, detail="Failed to get AI response")
