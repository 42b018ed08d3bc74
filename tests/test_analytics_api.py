from __future__ import annotations

from tests.api_helpers import register_and_login


def _create_goal(client, headers, name):
    response = client.post(
        "/goals",
        json={
            "name": name,
            "category": "survival",
            "timeframe": "short",
            "target_amount": "100.00",
        },
        headers=headers,
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]["goal"]


def test_events_are_scoped_to_the_caller(client) -> None:
    headers = register_and_login(client)
    other = register_and_login(client, username="other")
    goal = _create_goal(client, headers, "Trip")
    car = _create_goal(client, headers, "Car")
    _create_goal(client, other, "Bike")
    client.post(
        f"/goals/{goal['id']}/contribute", json={"amount": "10.00"}, headers=headers
    )

    response = client.get("/analytics/events?event_type=goal_created", headers=headers)
    assert response.status_code == 200
    events = response.get_json()["data"]["events"]
    assert [event["event_type"] for event in events] == ["goal_created"] * 2
    assert {event["event_data"]["goal_id"] for event in events} == {
        goal["id"],
        car["id"],
    }

    limited = client.get("/analytics/events?limit=1", headers=headers).get_json()
    assert len(limited["data"]["events"]) == 1


def test_metrics_shape(client) -> None:
    headers = register_and_login(client)
    goal = _create_goal(client, headers, "Trip")
    client.post(
        f"/goals/{goal['id']}/contribute", json={"amount": "100.00"}, headers=headers
    )

    response = client.get("/analytics/metrics?period=30days", headers=headers)
    assert response.status_code == 200
    metrics = response.get_json()["data"]
    assert metrics["period"]["name"] == "30days"
    assert len(metrics["daily_activity"]) == 7
    assert metrics["goals"]["completed"] == 1
    assert metrics["goals"]["success_rate"] == 100.0
    assert metrics["contributions"] == {"count": 1, "total_amount": "100.00"}


def test_invalid_analytics_queries_are_rejected(client) -> None:
    headers = register_and_login(client)

    for path in (
        "/analytics/metrics?period=1year",
        "/analytics/events?limit=0",
        "/analytics/events?event_type=unknown",
    ):
        response = client.get(path, headers=headers)
        assert response.status_code == 400, path
        assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"


def test_analytics_routes_require_token(client) -> None:
    assert client.get("/analytics/events").status_code == 401
    assert client.get("/analytics/metrics").status_code == 401
