from starlette.testclient import TestClient

from studydeck.api.deps import session_registry
from studydeck.services.sample_decks import SAMPLE_DECKS, seed_sample_decks


class TestExport:
    """GET /api/backup/export"""

    def test_export_uses_camel_case_and_iso_dates(self, client: TestClient, repository):
        seed_sample_decks(repository)

        response = client.get("/api/backup/export")
        assert response.status_code == 200
        assert "flashcard-backup-" in response.headers["content-disposition"]

        data = response.json()
        assert [d["name"] for d in data] == [
            "Spanish Vocabulary",
            "Biology Basics",
            "World History - WW2",
        ]
        history = data[2]
        assert history["isAIGenerated"] is True
        assert history["totalStudyTime"] == 1800
        assert history["lastStudied"] is None
        assert history["createdAt"].startswith("2024-11-10T00:00:00")

        card = history["cards"][0]
        assert card["correctCount"] == 3
        assert card["nextReview"].startswith("2024-11-19T00:00:00")

    def test_export_empty(self, client: TestClient):
        response = client.get("/api/backup/export")
        assert response.status_code == 200
        assert response.json() == []


class TestImport:
    """POST /api/backup/import"""

    def test_import_replaces_collection(self, client: TestClient, deck_with_cards):
        response = client.post("/api/backup/import", json=SAMPLE_DECKS)
        assert response.status_code == 200
        assert response.json() == {"decks": 3, "cards": 7}

        decks = client.get("/api/decks/").json()
        assert sorted(d["name"] for d in decks) == [
            "Biology Basics",
            "Spanish Vocabulary",
            "World History - WW2",
        ]

    def test_export_then_import_keeps_review_state(self, client: TestClient, repository):
        seed_sample_decks(repository)
        exported = client.get("/api/backup/export").json()

        client.delete("/api/backup/")
        response = client.post("/api/backup/import", json=exported)
        assert response.status_code == 200

        deck = client.get("/api/decks/1").json()
        card = next(c for c in deck["cards"] if c["id"] == "1-3")
        assert card["repetitions"] == 2
        assert card["incorrect_count"] == 2
        assert card["next_review"].startswith("2024-11-18T00:00:00")

    def test_import_accepts_snake_case(self, client: TestClient):
        payload = [{
            "id": "d1",
            "name": "Deck",
            "subject": "Art",
            "created_at": "2024-01-01T00:00:00Z",
            "cards": [{"id": "c1", "question": "Q", "answer": "A", "correct_count": 2}],
        }]
        response = client.post("/api/backup/import", json=payload)
        assert response.status_code == 200

        card = client.get("/api/decks/d1/cards").json()[0]
        assert card["correct_count"] == 2
        assert card["next_review"] is None

    def test_invalid_backup_keeps_existing_data(self, client: TestClient, deck_with_cards):
        response = client.post("/api/backup/import", json=[{"id": "x", "name": "No subject"}])
        assert response.status_code == 422

        decks = client.get("/api/decks/").json()
        assert [d["name"] for d in decks] == ["Biology Basics"]

    def test_negative_counter_rejected(self, client: TestClient):
        payload = [{
            "id": "d1",
            "name": "Deck",
            "subject": "Art",
            "createdAt": "2024-01-01T00:00:00Z",
            "cards": [{"id": "c1", "question": "Q", "answer": "A", "repetitions": -1}],
        }]
        response = client.post("/api/backup/import", json=payload)
        assert response.status_code == 422

    def test_duplicate_card_ids_rejected(self, client: TestClient):
        card = {"id": "c1", "question": "Q", "answer": "A"}
        payload = [
            {"id": "d1", "name": "A", "subject": "Art", "createdAt": "2024-01-01T00:00:00Z", "cards": [card]},
            {"id": "d2", "name": "B", "subject": "Art", "createdAt": "2024-01-01T00:00:00Z", "cards": [card]},
        ]
        response = client.post("/api/backup/import", json=payload)
        assert response.status_code == 422
        assert response.json()["detail"] == "Duplicate card id in backup"

    def test_not_a_list_rejected(self, client: TestClient):
        response = client.post("/api/backup/import", json={"decks": []})
        assert response.status_code == 422


class TestClear:
    def test_clear_removes_decks_and_sessions(self, client: TestClient, deck_with_cards):
        client.post(f"/api/study/decks/{deck_with_cards.id}")
        assert len(session_registry) == 1

        response = client.delete("/api/backup/")
        assert response.status_code == 200
        assert client.get("/api/decks/").json() == []
        assert len(session_registry) == 0
