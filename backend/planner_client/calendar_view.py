"""
calendar_view.py — Month grid and upcoming list on the client
"""

from planner_client.api import PlannerAPI
from planner_client.mutations import optimistic_remove
from planner_client.query_cache import QueryCache

MONTH_PREFIX = ("/api/calendar",)
UPCOMING_PREFIX = ("/api/calendar/upcoming",)


class CalendarView:
    def __init__(self, api: PlannerAPI, cache: QueryCache):
        self.api = api
        self.cache = cache

    def month(self, year: int, month: int) -> list[dict]:
        return self.cache.fetch(MONTH_PREFIX + (year, month), lambda: self.api.month_events(year, month))

    def upcoming(self, limit: int = 10) -> list[dict]:
        return self.cache.fetch(UPCOMING_PREFIX + (limit,), lambda: self.api.upcoming_events(limit))

    def _invalidate(self):
        self.cache.invalidate(MONTH_PREFIX)
        self.cache.invalidate(UPCOMING_PREFIX)

    def create(self, **fields) -> dict:
        try:
            return self.api.create_event(**fields)
        finally:
            self._invalidate()

    def update(self, event_id: int, **fields) -> dict:
        try:
            return self.api.update_event(event_id, **fields)
        finally:
            self._invalidate()

    def delete(self, event_id: int):
        """Remove the event from every cached month and the upcoming list right away."""
        optimistic_remove(
            self.cache,
            [MONTH_PREFIX, UPCOMING_PREFIX],
            event_id,
            lambda: self.api.delete_event(event_id),
        )
