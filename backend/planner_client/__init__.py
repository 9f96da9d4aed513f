from planner_client.api import NotFoundError, PlannerAPI, PlannerAPIError
from planner_client.calendar_view import CalendarView
from planner_client.flashcard_deck import FlashcardDeck
from planner_client.query_cache import QueryCache
from planner_client.study_session import StudySession
from planner_client.task_board import TaskBoard

__all__ = [
    "CalendarView",
    "FlashcardDeck",
    "NotFoundError",
    "PlannerAPI",
    "PlannerAPIError",
    "QueryCache",
    "StudySession",
    "TaskBoard",
]
