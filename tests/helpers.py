"""Shared test helpers (kept out of conftest so test modules can import them)."""

from httpx import AsyncClient

REGULAR_EMAIL = "jane.doe@example.com"
REGULAR_PASSWORD = "Str0ng!Pass"


async def login(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    """Log in and return Authorization headers."""
    response = await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    token = response.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}
