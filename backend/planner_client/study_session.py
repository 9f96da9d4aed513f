"""
study_session.py — Client state for the tutoring screen
Tracks the selected subject and conversation, and keeps the conversation
list and message log cached per subject/conversation.
"""

import logging

from planner_client.api import PlannerAPI
from planner_client.mutations import run_optimistic
from planner_client.query_cache import QueryCache

logger = logging.getLogger(__name__)


class NoSubjectError(Exception):
    """A subject-scoped action was attempted before a subject was selected."""


class NoConversationError(Exception):
    """A message was sent with no conversation selected."""


class StudySession:
    def __init__(self, api: PlannerAPI, cache: QueryCache):
        self.api = api
        self.cache = cache
        self.subject: dict | None = None
        self.conversation_id: int | None = None

    def _subject_id(self) -> int:
        if self.subject is None:
            raise NoSubjectError("Select a subject first")
        return self.subject["id"]

    def _conversations_key(self) -> tuple:
        return ("/api/study/conversations", self._subject_id())

    @staticmethod
    def _messages_key(conversation_id: int) -> tuple:
        return ("/api/study/messages", conversation_id)

    # --- Selection ---
    def conversations(self) -> list[dict]:
        if self.subject is None:
            return []
        subject_id = self._subject_id()
        return self.cache.fetch(self._conversations_key(), lambda: self.api.conversations(subject_id))

    def select_subject(self, subject: dict) -> int | None:
        """Switch subject and open its most recent conversation, if it has one."""
        self.subject = subject
        conversations = self.conversations()
        self.conversation_id = conversations[0]["id"] if conversations else None
        return self.conversation_id

    def select_conversation(self, conversation_id: int):
        self.conversation_id = conversation_id

    def start_conversation(self, title: str = "New conversation") -> dict:
        subject_id = self._subject_id()
        try:
            created = self.api.create_conversation(subject_id, title)
        finally:
            self.cache.invalidate(self._conversations_key())
        self.conversation_id = created["id"]
        return created

    def delete_conversation(self, conversation_id: int):
        """Drop the conversation from the list at once; clear it if it was open."""
        key = self._conversations_key()

        def apply():
            snapshot = self.cache.set_optimistic(
                key, lambda rows: [row for row in rows if row["id"] != conversation_id]
            )
            previous = self.conversation_id
            if previous == conversation_id:
                self.conversation_id = None
            return snapshot, previous

        def revert(context):
            snapshot, previous = context
            self.cache.rollback(snapshot)
            self.conversation_id = previous

        def reconcile():
            self.cache.invalidate(key)
            self.cache.remove(self._messages_key(conversation_id))

        run_optimistic(lambda: self.api.delete_conversation(conversation_id), apply, revert, reconcile)

    # --- Chat ---
    def messages(self) -> list[dict]:
        if self.conversation_id is None:
            return []
        conversation_id = self.conversation_id
        return self.cache.fetch(self._messages_key(conversation_id), lambda: self.api.messages(conversation_id))

    def send(self, text: str) -> str | None:
        """Send one message and return the tutor's reply. Blank text sends nothing.

        The message log is refetched afterwards either way, since the server
        keeps the student's turn even when the tutor call fails.
        """
        if not text.strip():
            return None
        if self.conversation_id is None:
            raise NoConversationError("Start a conversation first")

        conversation_id = self.conversation_id
        history = [{"role": m["role"], "content": m["content"]} for m in self.messages()]
        try:
            result = self.api.chat(
                conversation_id=conversation_id,
                subject_id=self._subject_id(),
                message=text,
                history=history,
                ai_category=self.subject.get("ai_category"),
            )
        finally:
            self.cache.invalidate(self._messages_key(conversation_id))
        return result["reply"]

    # --- Preferences ---
    def preferences(self) -> dict | None:
        subject_id = self._subject_id()
        return self.cache.fetch(("/api/preferences", subject_id), lambda: self.api.get_preference(subject_id))

    def save_preferences(self, **fields) -> dict:
        subject_id = self._subject_id()
        try:
            return self.api.save_preference(subject_id, **fields)
        finally:
            self.cache.invalidate(("/api/preferences", subject_id))
