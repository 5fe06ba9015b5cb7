"""Settings endpoints: list, read by key, update with audit."""

from httpx import AsyncClient


async def test_list_settings(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.get("/api/settings", headers=admin_headers)
    assert response.status_code == 200
    keys = [s["key"] for s in response.json()["data"]]
    assert keys == [
        "app.name",
        "app.version",
        "security.session_timeout",
        "upload.max_size",
    ]


async def test_list_settings_by_category(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.get("/api/settings?category=security", headers=admin_headers)
    settings = response.json()["data"]
    assert [s["key"] for s in settings] == ["security.session_timeout"]
    assert settings[0]["value"] == "3600"


async def test_get_setting_by_key(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.get("/api/settings/app.name", headers=admin_headers)
    assert response.status_code == 200
    setting = response.json()["data"]["setting"]
    assert setting["value"] == "WebCore Dashboard"
    assert setting["category"] == "general"


async def test_get_missing_setting_is_404(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.get("/api/settings/no.such.key", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "SETTING_NOT_FOUND"


async def test_update_setting(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.put(
        "/api/settings/security.session_timeout",
        json={"value": 7200, "description": "Idle timeout in seconds"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    setting = response.json()["data"]["setting"]
    assert setting["value"] == "7200"
    assert setting["description"] == "Idle timeout in seconds"

    response = await client.get("/api/settings/security.session_timeout", headers=admin_headers)
    assert response.json()["data"]["setting"]["value"] == "7200"

    response = await client.get("/api/dashboard/recent-activity", headers=admin_headers)
    latest = response.json()["data"]["activities"][0]
    assert latest["action"] == "setting_update"
    assert latest["details"]["previous_value"] == "3600"
    assert latest["details"]["value"] == "7200"


async def test_update_setting_boolean_value(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.put(
        "/api/settings/app.name", json={"value": True}, headers=admin_headers
    )
    assert response.json()["data"]["setting"]["value"] == "true"


async def test_update_setting_null_value_is_400(
    client: AsyncClient, admin_headers: dict
) -> None:
    response = await client.put(
        "/api/settings/app.name", json={"value": None}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_update_missing_setting_is_404(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.put(
        "/api/settings/no.such.key", json={"value": "x"}, headers=admin_headers
    )
    assert response.status_code == 404


async def test_settings_require_permission(client: AsyncClient, user_headers: dict) -> None:
    response = await client.get("/api/settings", headers=user_headers)
    assert response.status_code == 403
    assert response.json()["error"]["details"] == {"permission": "settings.read"}

    response = await client.put(
        "/api/settings/app.name", json={"value": "Mine"}, headers=user_headers
    )
    assert response.status_code == 403
    assert response.json()["error"]["details"] == {"permission": "settings.write"}
