# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.subject import Subject
from models.calendar_event import CalendarEvent
from models.task import Task
from models.conversation import Conversation
from models.chat_message import ChatMessage
from models.learning_preference import LearningPreference
from models.flashcard_set import FlashcardSet
from models.flashcard import Flashcard

__all__ = [
    "Subject",
    "CalendarEvent",
    "Task",
    "Conversation",
    "ChatMessage",
    "LearningPreference",
    "FlashcardSet",
    "Flashcard",
]
