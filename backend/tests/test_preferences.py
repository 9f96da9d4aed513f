"""Tests for per-subject learning preferences."""


class TestPreferences:
    def test_absent_is_null(self, client, subject):
        resp = client.get(f"/api/preferences/{subject['id']}")
        assert resp.status_code == 200
        assert resp.json() is None

    def test_upsert_keeps_one_row(self, client, subject):
        first = client.put("/api/preferences", json={
            "subject_id": subject["id"], "explanation_style": "socratic",
        }).json()
        second = client.put("/api/preferences", json={
            "subject_id": subject["id"], "explanation_style": "visual", "complexity_level": "advanced",
        }).json()

        assert second["id"] == first["id"]
        stored = client.get(f"/api/preferences/{subject['id']}").json()
        assert stored["explanation_style"] == "visual"
        assert stored["complexity_level"] == "advanced"

    def test_unknown_subject(self, client):
        resp = client.put("/api/preferences", json={"subject_id": 99, "explanation_style": "visual"})
        assert resp.status_code == 404
