"""Tests for flashcard sets and cards."""


def _set(client, subject, title="Vocab"):
    resp = client.post("/api/flashcards/sets", json={"subject_id": subject["id"], "title": title})
    assert resp.status_code == 201
    return resp.json()


class TestFlashcardSets:
    def test_list_all_and_by_subject(self, client, subject):
        other = client.post("/api/subjects", json={"name": "French", "color": "#ff0000"}).json()
        _set(client, subject, "Formulas")
        _set(client, other, "Verbs")

        assert len(client.get("/api/flashcards/sets").json()) == 2
        by_subject = client.get(f"/api/flashcards/sets/subject/{other['id']}").json()
        assert [s["title"] for s in by_subject] == ["Verbs"]

    def test_unknown_subject(self, client):
        resp = client.post("/api/flashcards/sets", json={"subject_id": 5, "title": "x"})
        assert resp.status_code == 404

    def test_delete_set_removes_cards(self, client, subject):
        card_set = _set(client, subject)
        client.post("/api/flashcards", json={"set_id": card_set["id"], "front": "a", "back": "b"})
        assert client.delete(f"/api/flashcards/sets/{card_set['id']}").status_code == 204
        assert client.get(f"/api/flashcards/{card_set['id']}").json() == []


class TestFlashcards:
    def test_cards_appended_in_order(self, client, subject):
        card_set = _set(client, subject)
        for front in ("one", "two", "three"):
            client.post("/api/flashcards", json={"set_id": card_set["id"], "front": front, "back": "-"})

        cards = client.get(f"/api/flashcards/{card_set['id']}").json()
        assert [(c["front"], c["order"]) for c in cards] == [("one", 0), ("two", 1), ("three", 2)]

    def test_card_for_missing_set(self, client):
        resp = client.post("/api/flashcards", json={"set_id": 77, "front": "a", "back": "b"})
        assert resp.status_code == 404

    def test_update_and_delete_card(self, client, subject):
        card_set = _set(client, subject)
        card = client.post("/api/flashcards", json={
            "set_id": card_set["id"], "front": "F = ma", "back": "Newton II",
        }).json()
        resp = client.patch(f"/api/flashcards/{card['id']}", json={"back": "Second law"})
        assert resp.json()["back"] == "Second law"
        assert client.delete(f"/api/flashcards/{card['id']}").status_code == 204
        assert client.delete(f"/api/flashcards/{card['id']}").status_code == 404
