"""Dashboard endpoints: aggregate stats and recent activity."""

from httpx import AsyncClient

from app.infrastructure.services.seed_service import ADMIN_EMAIL


async def test_stats_after_seed(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.get("/api/dashboard/stats", headers=admin_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["users"] == {"total": 1, "active": 1, "newThisMonth": 1, "growth": 100.0}
    assert data["roles"] == {"total": 2, "active": 2}
    assert data["permissions"] == {"total": 9}
    assert data["settings"] == {"total": 4}
    assert data["activity"] == {"totalActions": 1, "todayActions": 1}


async def test_stats_count_new_users(
    client: AsyncClient, admin_headers: dict, regular_user: dict
) -> None:
    response = await client.get("/api/dashboard/stats", headers=admin_headers)
    data = response.json()["data"]
    assert data["users"]["total"] == 2
    assert data["users"]["newThisMonth"] == 2
    # admin login + user create
    assert data["activity"]["totalActions"] == 2


async def test_regular_user_can_read_dashboard(client: AsyncClient, user_headers: dict) -> None:
    response = await client.get("/api/dashboard/stats", headers=user_headers)
    assert response.status_code == 200


async def test_recent_activity_newest_first(
    client: AsyncClient, admin_headers: dict, regular_user: dict
) -> None:
    response = await client.get("/api/dashboard/recent-activity", headers=admin_headers)
    assert response.status_code == 200
    activities = response.json()["data"]["activities"]
    assert [a["action"] for a in activities] == ["user_create", "login"]
    assert activities[0]["resource_id"] == regular_user["id"]
    assert activities[0]["user_email"] == ADMIN_EMAIL
    assert activities[0]["details"]["email"] == regular_user["email"]


async def test_recent_activity_limit(
    client: AsyncClient, admin_headers: dict, regular_user: dict
) -> None:
    response = await client.get(
        "/api/dashboard/recent-activity?limit=1", headers=admin_headers
    )
    assert len(response.json()["data"]["activities"]) == 1


async def test_recent_activity_limit_bounds(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.get(
        "/api/dashboard/recent-activity?limit=51", headers=admin_headers
    )
    assert response.status_code == 400


async def test_dashboard_requires_auth(client: AsyncClient) -> None:
    response = await client.get("/api/dashboard/stats")
    assert response.status_code == 401
