from starlette.testclient import TestClient


class TestCreateCard:
    """POST /api/decks/{deck_id}/cards"""

    def test_create_card_success(self, client: TestClient, test_deck):
        response = client.post(
            f"/api/decks/{test_deck.id}/cards",
            json={"question": "What is DNA?", "answer": "Deoxyribonucleic acid", "difficulty": "hard"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["deck_id"] == test_deck.id
        assert data["difficulty"] == "hard"
        assert data["repetitions"] == 0
        assert data["correct_count"] == 0
        assert data["incorrect_count"] == 0
        assert data["last_reviewed"] is None
        assert data["next_review"] is None
        assert data["accuracy"] == 0

    def test_create_card_default_difficulty(self, client: TestClient, test_deck):
        response = client.post(
            f"/api/decks/{test_deck.id}/cards",
            json={"question": "Q", "answer": "A"},
        )
        assert response.status_code == 201
        assert response.json()["difficulty"] == "medium"

    def test_create_card_blank_answer(self, client: TestClient, test_deck):
        response = client.post(
            f"/api/decks/{test_deck.id}/cards",
            json={"question": "Q", "answer": "   "},
        )
        assert response.status_code == 422

    def test_create_card_missing_deck(self, client: TestClient):
        response = client.post("/api/decks/missing/cards", json={"question": "Q", "answer": "A"})
        assert response.status_code == 404

    def test_new_card_is_listed_last(self, client: TestClient, deck_with_cards):
        client.post(
            f"/api/decks/{deck_with_cards.id}/cards",
            json={"question": "What is a ribosome?", "answer": "Protein factory"},
        )

        response = client.get(f"/api/decks/{deck_with_cards.id}/cards")
        assert response.status_code == 200
        questions = [c["question"] for c in response.json()]
        assert len(questions) == 4
        assert questions[-1] == "What is a ribosome?"


class TestUpdateCard:
    def test_update_card_keeps_review_history(self, client: TestClient, deck_with_cards):
        card = deck_with_cards.cards[2]

        response = client.put(
            f"/api/decks/{deck_with_cards.id}/cards/{card.id}",
            json={"answer": "The energy currency of the cell", "difficulty": "easy"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["answer"] == "The energy currency of the cell"
        assert data["question"] == "What is ATP?"
        assert data["difficulty"] == "easy"
        assert data["repetitions"] == 2
        assert data["correct_count"] == 2
        assert data["next_review"] is not None

    def test_update_card_blank_question(self, client: TestClient, deck_with_cards):
        card = deck_with_cards.cards[0]
        response = client.put(
            f"/api/decks/{deck_with_cards.id}/cards/{card.id}",
            json={"question": ""},
        )
        assert response.status_code == 422

    def test_update_card_from_other_deck(self, client: TestClient, deck_with_cards):
        other = client.post("/api/decks/", json={"name": "Other", "subject": "Art"}).json()
        card = deck_with_cards.cards[0]

        response = client.put(
            f"/api/decks/{other['id']}/cards/{card.id}",
            json={"question": "Hijack"},
        )
        assert response.status_code == 404


class TestDeleteCard:
    def test_delete_card(self, client: TestClient, deck_with_cards):
        card_id = deck_with_cards.cards[0].id

        response = client.delete(f"/api/decks/{deck_with_cards.id}/cards/{card_id}")
        assert response.status_code == 200

        cards = client.get(f"/api/decks/{deck_with_cards.id}/cards").json()
        assert card_id not in [c["id"] for c in cards]
        assert len(cards) == 2

    def test_delete_missing_card(self, client: TestClient, test_deck):
        response = client.delete(f"/api/decks/{test_deck.id}/cards/missing")
        assert response.status_code == 404
