"""Tests for calendar events."""

from datetime import datetime, timedelta, timezone


def _event(client, title, day, event_type="assignment", **extra):
    resp = client.post("/api/calendar", json={
        "title": title,
        "date": day.isoformat() if hasattr(day, "isoformat") else day,
        "event_type": event_type,
        **extra,
    })
    assert resp.status_code == 201
    return resp.json()


class TestMonthView:
    def test_only_events_in_month(self, client):
        _event(client, "Sept quiz", "2026-09-30", "quiz")
        _event(client, "Oct test", "2026-10-01", "test")
        _event(client, "Oct deadline", "2026-10-31", "deadline")
        _event(client, "Nov essay", "2026-11-01")

        titles = [e["title"] for e in client.get("/api/calendar/2026/10").json()]
        assert titles == ["Oct test", "Oct deadline"]

    def test_february_leap_year(self, client):
        _event(client, "Leap day", "2028-02-29")
        assert len(client.get("/api/calendar/2028/2").json()) == 1

    def test_invalid_month(self, client):
        assert client.get("/api/calendar/2026/13").status_code == 400


class TestUpcoming:
    def test_excludes_past_and_sorts(self, client):
        today = datetime.now(timezone.utc).date()
        _event(client, "later", today + timedelta(days=5))
        _event(client, "past", today - timedelta(days=30))
        _event(client, "today", today)

        titles = [e["title"] for e in client.get("/api/calendar/upcoming").json()]
        assert titles == ["today", "later"]

    def test_limit(self, client):
        today = datetime.now(timezone.utc).date()
        for i in range(12):
            _event(client, f"e{i}", today + timedelta(days=i))
        assert len(client.get("/api/calendar/upcoming").json()) == 10
        assert len(client.get("/api/calendar/upcoming", params={"limit": 3}).json()) == 3


class TestEventCrud:
    def test_invalid_event_type(self, client):
        resp = client.post("/api/calendar", json={
            "title": "x", "date": "2026-10-18", "event_type": "party",
        })
        assert resp.status_code == 400

    def test_update_and_delete(self, client):
        event = _event(client, "Essay", "2026-10-20")
        resp = client.patch(f"/api/calendar/{event['id']}", json={"date": "2026-10-22"})
        assert resp.json()["date"] == "2026-10-22"
        assert client.delete(f"/api/calendar/{event['id']}").status_code == 204
        assert client.patch(f"/api/calendar/{event['id']}", json={"title": "y"}).status_code == 404
