from __future__ import annotations

from tests.api_helpers import register_and_login


def test_profile_read_and_update(client) -> None:
    headers = register_and_login(client)

    response = client.get("/users/me", headers=headers)
    assert response.status_code == 200
    profile = response.get_json()["data"]["user"]
    assert profile["username"] == "saver"
    assert profile["currency_code"] == "USD"
    assert "password" not in profile

    response = client.put(
        "/users/me",
        json={"currency_code": "eur", "username": "saver_eu"},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Profile updated successfully"
    assert body["data"]["user"]["currency_code"] == "EUR"
    assert body["data"]["user"]["currency_symbol"] == "€"
    assert body["data"]["user"]["username"] == "saver_eu"


def test_profile_update_conflict_and_validation(client) -> None:
    register_and_login(client, username="taken")
    headers = register_and_login(client)

    response = client.put(
        "/users/me", json={"email": "taken@email.com"}, headers=headers
    )
    assert response.status_code == 409
    assert response.get_json()["error"]["code"] == "ALREADY_EXISTS"
    assert response.get_json()["error"]["details"] == {"field": "email"}

    response = client.put("/users/me", json={}, headers=headers)
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "VALIDATION_ERROR"

    response = client.put("/users/me", json={"role": "admin"}, headers=headers)
    assert response.status_code == 400
    assert client.get("/users/me", headers=headers).get_json()["data"]["user"][
        "role"
    ] == "user"


def test_password_change_flow(client) -> None:
    headers = register_and_login(client)

    response = client.put(
        "/users/me/password",
        json={"current_password": "Wrong@123", "new_password": "Better@456"},
        headers=headers,
    )
    assert response.status_code == 401
    assert response.get_json()["error"]["code"] == "INVALID_CREDENTIALS"

    response = client.put(
        "/users/me/password",
        json={"current_password": "Secret@123", "new_password": "Secret@123"},
        headers=headers,
    )
    assert response.status_code == 400
    assert "new_password" in response.get_json()["error"]["details"]["messages"]

    response = client.put(
        "/users/me/password",
        json={"current_password": "Secret@123", "new_password": "Better@456"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.get_json()["message"] == "Password changed successfully"

    login = client.post(
        "/auth/login", json={"email": "saver@email.com", "password": "Better@456"}
    )
    assert login.status_code == 200
    stale = client.post(
        "/auth/login", json={"email": "saver@email.com", "password": "Secret@123"}
    )
    assert stale.status_code == 401


def test_user_routes_require_token(client) -> None:
    assert client.get("/users/me").status_code == 401
    assert client.put("/users/me", json={"currency_code": "EUR"}).status_code == 401
    assert client.put("/users/me/password", json={}).status_code == 401
