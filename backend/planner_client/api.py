"""
api.py — Thin HTTP client for the planner REST API.
One method per endpoint; non-2xx responses become PlannerAPIError.
"""

import logging
from datetime import date

import httpx

logger = logging.getLogger(__name__)


class PlannerAPIError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class NotFoundError(PlannerAPIError):
    pass


def _jsonable(fields: dict) -> dict:
    return {k: (v.isoformat() if isinstance(v, date) else v) for k, v in fields.items()}


class PlannerAPI:
    def __init__(self, http: httpx.Client):
        self.http = http

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "PlannerAPI":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def _request(self, method: str, path: str, **kwargs):
        try:
            resp = self.http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise PlannerAPIError(0, str(e)) from e

        if resp.is_error:
            try:
                body = resp.json()
            except ValueError:
                body = None
            detail = body.get("detail", resp.text) if isinstance(body, dict) else resp.text
            error_class = NotFoundError if resp.status_code == 404 else PlannerAPIError
            raise error_class(resp.status_code, str(detail))
        if resp.status_code == 204:
            return None
        return resp.json()

    # --- Subjects ---
    def list_subjects(self) -> list[dict]:
        return self._request("GET", "/api/subjects")

    def create_subject(self, **fields) -> dict:
        return self._request("POST", "/api/subjects", json=fields)

    def update_subject(self, subject_id: int, **fields) -> dict:
        return self._request("PATCH", f"/api/subjects/{subject_id}", json=fields)

    def delete_subject(self, subject_id: int) -> None:
        self._request("DELETE", f"/api/subjects/{subject_id}")

    # --- Calendar ---
    def month_events(self, year: int, month: int) -> list[dict]:
        return self._request("GET", f"/api/calendar/{year}/{month}")

    def upcoming_events(self, limit: int = 10) -> list[dict]:
        return self._request("GET", "/api/calendar/upcoming", params={"limit": limit})

    def create_event(self, **fields) -> dict:
        return self._request("POST", "/api/calendar", json=_jsonable(fields))

    def update_event(self, event_id: int, **fields) -> dict:
        return self._request("PATCH", f"/api/calendar/{event_id}", json=_jsonable(fields))

    def delete_event(self, event_id: int) -> None:
        self._request("DELETE", f"/api/calendar/{event_id}")

    # --- Tasks ---
    def tasks_for(self, day: date) -> list[dict]:
        return self._request("GET", f"/api/tasks/{day.isoformat()}")

    def create_task(self, **fields) -> dict:
        return self._request("POST", "/api/tasks", json=_jsonable(fields))

    def update_task(self, task_id: int, **fields) -> dict:
        return self._request("PATCH", f"/api/tasks/{task_id}", json=_jsonable(fields))

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")

    # --- Study ---
    def conversations(self, subject_id: int) -> list[dict]:
        return self._request("GET", f"/api/study/conversations/{subject_id}")

    def create_conversation(self, subject_id: int, title: str) -> dict:
        return self._request(
            "POST", "/api/study/conversations", json={"subject_id": subject_id, "title": title}
        )

    def delete_conversation(self, conversation_id: int) -> None:
        self._request("DELETE", f"/api/study/conversations/{conversation_id}")

    def messages(self, conversation_id: int) -> list[dict]:
        return self._request("GET", f"/api/study/messages/{conversation_id}")

    def chat(
        self,
        conversation_id: int,
        subject_id: int,
        message: str,
        history: list[dict],
        ai_category: str | None = None,
    ) -> dict:
        body = {
            "conversation_id": conversation_id,
            "subject_id": subject_id,
            "message": message,
            "history": history,
        }
        if ai_category:
            body["ai_category"] = ai_category
        return self._request("POST", "/api/study/chat", json=body)

    # --- Preferences ---
    def get_preference(self, subject_id: int) -> dict | None:
        return self._request("GET", f"/api/preferences/{subject_id}")

    def save_preference(self, subject_id: int, **fields) -> dict:
        return self._request("PUT", "/api/preferences", json={"subject_id": subject_id, **fields})

    # --- Flashcards ---
    def flashcard_sets(self, subject_id: int | None = None) -> list[dict]:
        if subject_id is None:
            return self._request("GET", "/api/flashcards/sets")
        return self._request("GET", f"/api/flashcards/sets/subject/{subject_id}")

    def create_flashcard_set(self, **fields) -> dict:
        return self._request("POST", "/api/flashcards/sets", json=fields)

    def update_flashcard_set(self, set_id: int, **fields) -> dict:
        return self._request("PATCH", f"/api/flashcards/sets/{set_id}", json=fields)

    def delete_flashcard_set(self, set_id: int) -> None:
        self._request("DELETE", f"/api/flashcards/sets/{set_id}")

    def flashcards(self, set_id: int) -> list[dict]:
        return self._request("GET", f"/api/flashcards/{set_id}")

    def create_flashcard(self, **fields) -> dict:
        return self._request("POST", "/api/flashcards", json=fields)

    def update_flashcard(self, card_id: int, **fields) -> dict:
        return self._request("PATCH", f"/api/flashcards/{card_id}", json=fields)

    def delete_flashcard(self, card_id: int) -> None:
        self._request("DELETE", f"/api/flashcards/{card_id}")
