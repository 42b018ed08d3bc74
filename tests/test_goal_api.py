from __future__ import annotations

from uuid import uuid4

import pytest

from tests.api_helpers import register_and_login


def _create(client, headers, **overrides):
    payload = {
        "name": "Emergency fund",
        "category": "survival",
        "timeframe": "short",
        "target_amount": "1000.00",
    }
    payload.update(overrides)
    response = client.post("/goals", json=payload, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]["goal"]


def test_goal_lifecycle(client) -> None:
    headers = register_and_login(client)
    goal = _create(client, headers, current_amount="250.00")
    assert goal["progress_percentage"] == 25
    assert goal["status"] == "active"
    assert goal["currency_symbol"] == "$"

    response = client.get(f"/goals/{goal['id']}", headers=headers)
    assert response.status_code == 200
    assert response.get_json()["data"]["goal"]["name"] == "Emergency fund"

    response = client.put(
        f"/goals/{goal['id']}", json={"name": "Rainy day"}, headers=headers
    )
    assert response.status_code == 200
    assert response.get_json()["data"]["goal"]["name"] == "Rainy day"

    response = client.post(
        f"/goals/{goal['id']}/contribute",
        json={"amount": "750.00", "note": "Bonus"},
        headers=headers,
    )
    assert response.status_code == 200
    completed = response.get_json()["data"]["goal"]
    assert completed["progress_percentage"] == 100
    assert completed["status"] == "completed"
    assert completed["current_amount"] == "1000.00"
    assert [m["percentage"] for m in completed["milestones"]] == [25, 50, 75, 100]
    assert completed["contributions"][0]["note"] == "Bonus"

    response = client.delete(f"/goals/{goal['id']}", headers=headers)
    assert response.status_code == 200
    assert client.get(f"/goals/{goal['id']}", headers=headers).status_code == 404


def test_list_goals_with_filters_and_statistics(client) -> None:
    headers = register_and_login(client)
    _create(client, headers, name="Short one", current_amount="100.00")
    _create(client, headers, name="Long one", timeframe="long")

    response = client.get("/goals?per_page=1", headers=headers)
    assert response.status_code == 200
    body = response.get_json()
    assert len(body["data"]["items"]) == 1
    assert body["meta"]["pagination"]["total"] == 2
    assert body["data"]["statistics"]["total_goals"] == 2

    response = client.get("/goals?timeframe=long", headers=headers)
    items = response.get_json()["data"]["items"]
    assert [item["name"] for item in items] == ["Long one"]

    response = client.get("/goals?timeframe=forever", headers=headers)
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_create_goal_validation_error(client) -> None:
    headers = register_and_login(client)

    response = client.post(
        "/goals",
        json={"name": "", "category": "survival", "timeframe": "short"},
        headers=headers,
    )

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "target_amount" in body["error"]["details"]["messages"]


def test_other_users_goal_is_forbidden(client) -> None:
    owner = register_and_login(client, username="owner")
    intruder = register_and_login(client, username="intruder")
    goal = _create(client, owner)

    response = client.get(f"/goals/{goal['id']}", headers=intruder)
    assert response.status_code == 403
    assert response.get_json()["error"]["code"] == "FORBIDDEN"

    response = client.post(
        f"/goals/{goal['id']}/contribute", json={"amount": "5"}, headers=intruder
    )
    assert response.status_code == 403

    response = client.get(f"/goals/{uuid4()}", headers=intruder)
    assert response.status_code == 404
    assert response.get_json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.parametrize("amount", ["-5", "0.004", "0.001"])
def test_contribution_rejects_amounts_below_one_cent(client, amount) -> None:
    headers = register_and_login(client)
    goal = _create(client, headers)

    response = client.post(
        f"/goals/{goal['id']}/contribute", json={"amount": amount}, headers=headers
    )

    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "INVALID_AMOUNT"
    stored = client.get(f"/goals/{goal['id']}", headers=headers).get_json()
    assert stored["data"]["goal"]["current_amount"] == "0.00"


def test_goal_target_must_be_at_least_one_cent(client) -> None:
    headers = register_and_login(client)

    response = client.post(
        "/goals",
        json={
            "name": "Tiny",
            "category": "survival",
            "timeframe": "short",
            "target_amount": "0.001",
        },
        headers=headers,
    )

    assert response.status_code == 400
    body = response.get_json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert "target_amount" in body["error"]["details"]["messages"]


def test_completed_goal_status_is_locked(client) -> None:
    headers = register_and_login(client)
    goal = _create(client, headers, current_amount="1000.00")
    assert goal["status"] == "completed"

    response = client.put(
        f"/goals/{goal['id']}", json={"status": "active"}, headers=headers
    )

    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "INVALID_OPERATION"


def test_dashboard(client) -> None:
    headers = register_and_login(client)
    _create(client, headers, name="Almost", current_amount="900.00")
    _create(client, headers, name="Started", current_amount="100.00")

    response = client.get("/goals/dashboard", headers=headers)

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["overview"]["total_goals"] == 2
    assert data["overview"]["total_saved"] == "1000.00"
    assert [card["name"] for card in data["near_completion"]] == ["Almost"]
    assert {card["name"] for card in data["recent_goals"]} == {"Almost", "Started"}


def test_delete_all_goals(client) -> None:
    headers = register_and_login(client)
    _create(client, headers, name="One")
    _create(client, headers, name="Two")

    response = client.delete("/goals", headers=headers)

    assert response.status_code == 200
    assert response.get_json()["data"] == {"deleted_count": 2}
    listing = client.get("/goals", headers=headers).get_json()
    assert listing["data"]["items"] == []
