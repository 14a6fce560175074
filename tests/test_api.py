import json
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from finmate.app import create_app


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with TestClient(create_app()) as test_client:
        yield test_client


def configure(client: TestClient, budget: float = 500) -> None:
    response = client.post("/api/budget", json={"weekly_budget": budget})
    assert response.status_code == 200


def test_unconfigured_budget(client: TestClient) -> None:
    response = client.get("/api/budget")
    assert response.status_code == 200
    data = response.json()
    assert data["configured"] is False
    assert data["weekly_budget"] == 0
    assert [c["category"]["id"] for c in data["categories"]] == ["food", "transport", "social", "other"]


def test_set_budget_allocates_categories(client: TestClient) -> None:
    configure(client)

    data = client.get("/api/budget").json()
    assert data["configured"] is True
    limits = {c["category"]["name"]: c["category"]["weekly_limit"] for c in data["categories"]}
    assert limits == {"Food": 200, "Transport": 100, "Social": 125, "Other": 75}


def test_set_budget_rejects_zero(client: TestClient) -> None:
    response = client.post("/api/budget", json={"weekly_budget": 0})
    assert response.status_code == 422


def test_add_transactions_and_summary(client: TestClient) -> None:
    configure(client)
    for category_id, label, amount in [("food", "Coffee", 5.5), ("transport", "Uber", 12), ("social", "Drinks", 35)]:
        response = client.post(
            "/api/transactions",
            json={"category_id": category_id, "label": label, "amount": amount},
        )
        assert response.status_code == 200

    data = client.get("/api/budget").json()
    assert data["remaining_this_week"] == pytest.approx(447.5)
    food = next(c for c in data["categories"] if c["category"]["id"] == "food")
    assert food["spent"] == pytest.approx(5.5)

    listing = client.get("/api/transactions").json()
    assert [t["label"] for t in listing["transactions"]] == ["Coffee", "Uber", "Drinks"]


@pytest.mark.parametrize(
    "payload",
    [
        {"category_id": "food", "label": "", "amount": 5},
        {"category_id": "food", "label": "Coffee", "amount": 0},
        {"category_id": "food", "label": "Coffee", "amount": -3},
    ],
)
def test_add_transaction_validation(client: TestClient, payload: dict) -> None:
    response = client.post("/api/transactions", json=payload)
    assert response.status_code == 422


def test_old_transactions_only_listed_with_all_scope(client: TestClient) -> None:
    configure(client)
    client.post(
        "/api/transactions",
        json={"category_id": "food", "label": "Old", "amount": 9, "date": "2001-01-01T10:00:00"},
    )

    assert client.get("/api/transactions").json()["transactions"] == []
    assert len(client.get("/api/transactions?scope=all").json()["transactions"]) == 1
    assert client.get("/api/budget").json()["remaining_this_week"] == 500


def test_update_category_limit(client: TestClient) -> None:
    configure(client)

    response = client.put("/api/categories/food", json={"weekly_limit": 250})
    assert response.status_code == 200
    assert response.json()["weekly_limit"] == 250

    missing = client.put("/api/categories/rent", json={"weekly_limit": 10})
    assert missing.status_code == 404


def test_chat_and_quick_action(client: TestClient) -> None:
    configure(client)

    turns = client.post("/api/chat", json={"message": "Reallocate $15 from Social to Food"}).json()
    assert len(turns) == 1
    action = turns[0]["quick_actions"][0]
    assert action["action"] == "reallocate"

    applied = client.post("/api/chat/actions", json={"action": action})
    assert applied.status_code == 200
    assert "Done!" in applied.json()[0]["text"]

    categories = {c["id"]: c["weekly_limit"] for c in client.get("/api/categories").json()}
    assert categories["social"] == 110
    assert categories["food"] == 215


def test_chat_welcome(client: TestClient) -> None:
    configure(client)
    turn = client.get("/api/chat/welcome").json()
    assert "$500.00 remaining this week" in turn["text"]


def test_reset_session_persists(client: TestClient, tmp_path: Path) -> None:
    configure(client)
    client.post("/api/transactions", json={"category_id": "food", "label": "Coffee", "amount": 4.5})

    response = client.post("/api/session/reset")
    assert response.json() == {"status": "reset"}

    data = client.get("/api/budget").json()
    assert data["weekly_budget"] == 0
    assert all(c["category"]["weekly_limit"] == 0 for c in data["categories"])

    with open(tmp_path / "ledger.json") as f:
        stored = json.load(f)
    assert stored["transactions"] == []
    assert stored["weekly_budget"] == 0
