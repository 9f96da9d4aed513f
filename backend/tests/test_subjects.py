"""Tests for subjects and what happens to dependent rows when one is deleted."""

from models import (
    CalendarEvent,
    ChatMessage,
    Conversation,
    Flashcard,
    FlashcardSet,
    LearningPreference,
    Task,
)


class TestSubjectCrud:
    def test_create_and_list(self, client, subject):
        subjects = client.get("/api/subjects").json()
        assert [s["name"] for s in subjects] == ["Physics"]
        assert subjects[0]["ai_category"] == "math_science"

    def test_bad_color_rejected(self, client):
        resp = client.post("/api/subjects", json={"name": "Art", "color": "blue"})
        assert resp.status_code == 400

    def test_unknown_category_rejected(self, client):
        resp = client.post("/api/subjects", json={
            "name": "Art", "color": "#ffffff", "ai_category": "painting",
        })
        assert resp.status_code == 400

    def test_update(self, client, subject):
        resp = client.patch(f"/api/subjects/{subject['id']}", json={"name": "AP Physics"})
        assert resp.json()["name"] == "AP Physics"
        assert resp.json()["color"] == subject["color"]

    def test_delete_missing(self, client):
        assert client.delete("/api/subjects/404").status_code == 404


class TestSubjectDelete:
    def test_dependents_detached_or_removed(self, client, db, subject, conversation):
        sid = subject["id"]
        client.post("/api/calendar", json={
            "title": "Quiz", "date": "2026-10-20", "event_type": "quiz", "subject_id": sid,
        })
        client.post("/api/tasks", json={"title": "Revise", "date": "2026-10-18", "subject_id": sid})
        client.put("/api/preferences", json={"subject_id": sid, "explanation_style": "visual"})
        card_set = client.post("/api/flashcards/sets", json={"subject_id": sid, "title": "Units"}).json()
        client.post("/api/flashcards", json={"set_id": card_set["id"], "front": "N", "back": "newton"})
        client.post("/api/study/chat", json={
            "conversation_id": conversation["id"], "subject_id": sid, "message": "hi",
        })

        assert client.delete(f"/api/subjects/{sid}").status_code == 204

        # Events and tasks survive without a subject
        assert [e.subject_id for e in db.query(CalendarEvent).all()] == [None]
        assert [t.subject_id for t in db.query(Task).all()] == [None]
        # Everything else that belonged to the subject is gone
        assert db.query(Conversation).count() == 0
        assert db.query(ChatMessage).count() == 0
        assert db.query(LearningPreference).count() == 0
        assert db.query(FlashcardSet).count() == 0
        assert db.query(Flashcard).count() == 0
