"""Login endpoint and bearer-token handling."""

from httpx import AsyncClient

from app.infrastructure.services.seed_service import ADMIN_DEFAULT_PASSWORD, ADMIN_EMAIL


async def test_login_returns_token_and_user(client: AsyncClient, seeded) -> None:
    response = await client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_DEFAULT_PASSWORD},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["expires_in"] == 24 * 60 * 60
    user = data["user"]
    assert user["email"] == ADMIN_EMAIL
    assert [r["name"] for r in user["roles"]] == ["admin"]
    assert "users.delete" in user["permissions"]
    assert user["last_login_at"] is not None
    assert "hashed_password" not in user


async def test_login_email_is_case_insensitive(client: AsyncClient, seeded) -> None:
    response = await client.post(
        "/api/auth/login",
        json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_DEFAULT_PASSWORD},
    )
    assert response.status_code == 200


async def test_login_wrong_password(client: AsyncClient, seeded) -> None:
    response = await client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong-password"}
    )
    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "AUTHENTICATION_ERROR"


async def test_login_unknown_email(client: AsyncClient, seeded) -> None:
    response = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "whatever1"}
    )
    assert response.status_code == 401


async def test_login_invalid_body_is_400(client: AsyncClient) -> None:
    response = await client.post("/api/auth/login", json={"email": "not-an-email"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["error"]["details"]["errors"]}
    assert {"email", "password"} <= fields


async def test_login_is_recorded_in_activity(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.get("/api/dashboard/recent-activity", headers=admin_headers)
    activities = response.json()["data"]["activities"]
    assert activities[0]["action"] == "login"
    assert activities[0]["user_email"] == ADMIN_EMAIL


async def test_missing_token_is_401(client: AsyncClient) -> None:
    response = await client.get("/api/profile")
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


async def test_garbage_token_is_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/profile", headers={"Authorization": "Bearer not.a.jwt"}
    )
    assert response.status_code == 401
