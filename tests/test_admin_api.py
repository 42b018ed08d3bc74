from __future__ import annotations

from tests.api_helpers import login_as_admin, register_and_login, user_id_for


def test_admin_routes_reject_regular_users(client) -> None:
    headers = register_and_login(client)

    response = client.get("/admin/users", headers=headers)

    assert response.status_code == 403
    assert response.get_json()["error"]["code"] == "FORBIDDEN"


def test_admin_routes_require_token(client) -> None:
    assert client.get("/admin/stats").status_code == 401


def test_admin_user_management(app, client) -> None:
    register_and_login(client, username="saver")
    admin = login_as_admin(app, client)
    saver_id = user_id_for(app, "saver")

    listing = client.get("/admin/users?search=saver", headers=admin).get_json()
    assert [item["username"] for item in listing["data"]["items"]] == ["saver"]
    assert listing["meta"]["pagination"]["total"] == 1

    details = client.get(f"/admin/users/{saver_id}", headers=admin).get_json()
    assert details["data"]["user"]["username"] == "saver"

    response = client.put(
        f"/admin/users/{saver_id}", json={"role": "admin"}, headers=admin
    )
    assert response.status_code == 200

    response = client.delete(f"/admin/users/{saver_id}", headers=admin)
    assert response.status_code == 200
    assert response.get_json()["data"]["deleted_username"] == "saver"


def test_admin_cannot_delete_self(app, client) -> None:
    admin = login_as_admin(app, client)
    admin_id = user_id_for(app, "root")

    response = client.delete(f"/admin/users/{admin_id}", headers=admin)

    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "INVALID_OPERATION"


def test_admin_goal_management(app, client) -> None:
    saver = register_and_login(client, username="saver")
    created = client.post(
        "/goals",
        json={
            "name": "House",
            "category": "necessity",
            "timeframe": "long",
            "target_amount": "50000.00",
        },
        headers=saver,
    ).get_json()["data"]["goal"]
    admin = login_as_admin(app, client)

    listing = client.get("/admin/goals?timeframe=long", headers=admin).get_json()
    assert listing["data"]["items"][0]["owner"]["username"] == "saver"

    response = client.delete(f"/admin/goals/{created['id']}", headers=admin)
    assert response.status_code == 200
    assert client.get(f"/goals/{created['id']}", headers=saver).status_code == 404


def test_platform_stats(app, client) -> None:
    register_and_login(client, username="saver")
    admin = login_as_admin(app, client)

    response = client.get("/admin/stats", headers=admin)

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["users"]["total"] == 2
    assert data["users"]["admins"] == 1
    assert set(data["goals"]) >= {"total", "active", "completed", "by_category"}


def test_notification_feed(app, client) -> None:
    saver = register_and_login(client, username="saver")
    client.post(
        "/goals",
        json={
            "name": "House",
            "category": "necessity",
            "timeframe": "long",
            "target_amount": "50000.00",
        },
        headers=saver,
    )
    admin = login_as_admin(app, client)

    feed = client.get("/admin/notifications", headers=admin).get_json()
    types = {item["type"] for item in feed["data"]["items"]}
    assert {"user_registered", "user_first_goal", "goal_high_value"} <= types
    assert feed["meta"]["unread_count"] == 3

    severe = client.get(
        "/admin/notifications?type=user_registered", headers=admin
    ).get_json()
    assert [item["type"] for item in severe["data"]["items"]] == ["user_registered"]

    first_id = feed["data"]["items"][0]["id"]
    response = client.post(f"/admin/notifications/{first_id}/read", headers=admin)
    assert response.get_json()["data"]["notification"]["is_read"] is True

    count = client.get("/admin/notifications/unread-count", headers=admin).get_json()
    assert count["data"]["unread_count"] == 2

    response = client.post("/admin/notifications/mark-all-read", headers=admin)
    assert response.get_json()["data"]["updated_count"] == 2

    stats = client.get("/admin/notifications/stats", headers=admin).get_json()
    assert stats["data"]["unread"] == 0
    assert stats["data"]["total"] == 3

    response = client.delete(f"/admin/notifications/{first_id}", headers=admin)
    assert response.status_code == 200

    response = client.delete(
        "/admin/notifications/cleanup?days=1&only_read=true", headers=admin
    )
    assert response.get_json()["data"] == {"deleted_count": 0, "days": 1}


def test_admin_listing_queries(app, client) -> None:
    for username in ("saver", "other"):
        headers = register_and_login(client, username=username)
        client.post(
            "/goals",
            json={
                "name": f"{username} fund",
                "category": "survival",
                "timeframe": "short",
                "target_amount": "100.00",
            },
            headers=headers,
        )
    admin = login_as_admin(app, client)
    saver_id = user_id_for(app, "saver")

    listing = client.get(f"/admin/goals?user_id={saver_id}", headers=admin).get_json()
    assert [item["name"] for item in listing["data"]["items"]] == ["saver fund"]

    users = client.get("/admin/users?role=user&per_page=1", headers=admin).get_json()
    assert len(users["data"]["items"]) == 1
    assert users["meta"]["pagination"]["total"] == 2

    for path in (
        "/admin/users?per_page=101",
        "/admin/users?role=owner",
        "/admin/goals?per_page=0",
        "/admin/goals?user_id=not-a-uuid",
    ):
        response = client.get(path, headers=admin)
        assert response.status_code == 400, path
        assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"
