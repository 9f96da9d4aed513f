"""
task_board.py — One day's task list on the client
Incomplete tasks are drag-reorderable; completed ones sit below them.
"""

from datetime import date

from planner_client.api import PlannerAPI
from planner_client.mutations import optimistic_remove
from planner_client.ordering import compute_reorder, next_order, persist_reorder, split_by_completion
from planner_client.query_cache import QueryCache


class TaskBoard:
    def __init__(self, api: PlannerAPI, cache: QueryCache, day: date):
        self.api = api
        self.cache = cache
        self.day = day

    @property
    def key(self) -> tuple:
        return ("/api/tasks", self.day.isoformat())

    def tasks(self) -> list[dict]:
        return self.cache.fetch(self.key, lambda: self.api.tasks_for(self.day))

    def incomplete(self) -> list[dict]:
        return split_by_completion(self.tasks())[0]

    def completed(self) -> list[dict]:
        return split_by_completion(self.tasks())[1]

    def add(self, title: str, subject_id: int | None = None) -> dict | None:
        """Append a task after every existing task for the day. Blank titles are ignored."""
        if not title.strip():
            return None
        try:
            return self.api.create_task(
                title=title.strip(),
                date=self.day,
                order=next_order(self.tasks()),
                subject_id=subject_id,
            )
        finally:
            self.cache.invalidate(self.key)

    def toggle(self, task: dict) -> dict:
        try:
            return self.api.update_task(task["id"], completed=not task["completed"])
        finally:
            self.cache.invalidate(self.key)

    def move(self, active_id: int, over_id: int) -> list[tuple[int, int]]:
        """Drop *active_id* on *over_id* within the incomplete list."""
        changes = compute_reorder(self.incomplete(), active_id, over_id)
        if not changes:
            return []
        try:
            return persist_reorder(changes, lambda task_id, order: self.api.update_task(task_id, order=order))
        finally:
            self.cache.invalidate(self.key)

    def delete(self, task_id: int):
        optimistic_remove(self.cache, [self.key], task_id, lambda: self.api.delete_task(task_id))
