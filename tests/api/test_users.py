"""User management endpoints: permissions, listing, CRUD, conflicts, last-admin guard."""

from httpx import AsyncClient

from app.infrastructure.services.seed_service import ADMIN_EMAIL


def _new_user(**overrides) -> dict:
    payload = {
        "email": "john.smith@example.com",
        "username": "jsmith",
        "password": "Passw0rd!",
        "first_name": "John",
        "last_name": "Smith",
    }
    payload.update(overrides)
    return payload


async def test_create_user(client: AsyncClient, admin_headers: dict, user_role_id: str) -> None:
    response = await client.post(
        "/api/users",
        json=_new_user(email="John.Smith@Example.com", role_ids=[user_role_id]),
        headers=admin_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["email"] == "john.smith@example.com"
    assert user["username"] == "jsmith"
    assert [r["name"] for r in user["roles"]] == ["user"]
    assert user["permissions"] == []
    assert user["is_active"] is True


async def test_create_user_duplicate_email_is_409(
    client: AsyncClient, admin_headers: dict
) -> None:
    response = await client.post(
        "/api/users", json=_new_user(email=ADMIN_EMAIL), headers=admin_headers
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


async def test_create_user_duplicate_username_is_409(
    client: AsyncClient, admin_headers: dict, regular_user: dict
) -> None:
    response = await client.post(
        "/api/users", json=_new_user(username="JaneDoe"), headers=admin_headers
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "USERNAME_ALREADY_EXISTS"


async def test_create_user_unknown_role_is_400(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.post(
        "/api/users", json=_new_user(role_ids=["missing-role"]), headers=admin_headers
    )
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_ROLES"
    assert error["details"]["errors"] == ["missing-role"]


async def test_create_user_short_password_is_400(
    client: AsyncClient, admin_headers: dict
) -> None:
    response = await client.post(
        "/api/users", json=_new_user(password="short"), headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_users_paginates(client: AsyncClient, admin_headers: dict) -> None:
    for i in range(3):
        response = await client.post(
            "/api/users",
            json=_new_user(email=f"user{i}@example.com", username=f"user{i}"),
            headers=admin_headers,
        )
        assert response.status_code == 201

    response = await client.get("/api/users?page=1&limit=2", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert len(body["data"]) == 2
    assert body["pagination"] == {
        "page": 1,
        "limit": 2,
        "total": 4,
        "totalPages": 2,
        "hasNext": True,
        "hasPrev": False,
    }

    response = await client.get("/api/users?page=2&limit=2", headers=admin_headers)
    body = response.json()
    assert len(body["data"]) == 2
    assert body["pagination"]["hasNext"] is False
    assert body["pagination"]["hasPrev"] is True


async def test_list_users_search_and_sort(
    client: AsyncClient, admin_headers: dict, regular_user: dict
) -> None:
    response = await client.get("/api/users?search=JANE", headers=admin_headers)
    body = response.json()
    assert [u["email"] for u in body["data"]] == ["jane.doe@example.com"]

    response = await client.get(
        "/api/users?sort_by=email&sort_order=asc", headers=admin_headers
    )
    emails = [u["email"] for u in response.json()["data"]]
    assert emails == sorted(emails)


async def test_list_users_rejects_bad_sort_field(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.get("/api/users?sort_by=hashed_password", headers=admin_headers)
    assert response.status_code == 400


async def test_user_stats(client: AsyncClient, admin_headers: dict, regular_user: dict) -> None:
    await client.put(
        f"/api/users/{regular_user['id']}", json={"is_active": False}, headers=admin_headers
    )
    response = await client.get("/api/users/stats", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"] == {
        "total": 2,
        "active": 1,
        "inactive": 1,
        "verified": 1,
        "unverified": 1,
    }


async def test_get_user(client: AsyncClient, admin_headers: dict, regular_user: dict) -> None:
    response = await client.get(f"/api/users/{regular_user['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["data"]["user"]["email"] == "jane.doe@example.com"


async def test_get_missing_user_is_404(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.get("/api/users/nope", headers=admin_headers)
    assert response.status_code == 404
    body = response.json()
    assert body["message"] == "User not found"
    assert body["error"]["code"] == "USER_NOT_FOUND"


async def test_update_user_fields_and_roles(
    client: AsyncClient, admin_headers: dict, regular_user: dict, seeded
) -> None:
    response = await client.put(
        f"/api/users/{regular_user['id']}",
        json={"first_name": "Janet", "role_ids": [seeded.admin_role_id]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    user = response.json()["data"]["user"]
    assert user["first_name"] == "Janet"
    assert user["last_name"] == "Doe"
    assert [r["name"] for r in user["roles"]] == ["admin"]
    assert "users.write" in user["permissions"]


async def test_update_user_email_conflict(
    client: AsyncClient, admin_headers: dict, regular_user: dict
) -> None:
    response = await client.put(
        f"/api/users/{regular_user['id']}", json={"email": ADMIN_EMAIL}, headers=admin_headers
    )
    assert response.status_code == 409


async def test_update_user_keeping_own_email_is_allowed(
    client: AsyncClient, admin_headers: dict, regular_user: dict
) -> None:
    response = await client.put(
        f"/api/users/{regular_user['id']}",
        json={"email": regular_user["email"], "username": regular_user["username"]},
        headers=admin_headers,
    )
    assert response.status_code == 200


async def test_delete_user(client: AsyncClient, admin_headers: dict, regular_user: dict) -> None:
    response = await client.delete(f"/api/users/{regular_user['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True

    response = await client.get(f"/api/users/{regular_user['id']}", headers=admin_headers)
    assert response.status_code == 404


async def test_delete_user_who_has_activity(
    client: AsyncClient, admin_headers: dict, regular_user: dict, user_headers: dict
) -> None:
    """Audit entries outlive the user; they just lose the user link."""
    response = await client.delete(f"/api/users/{regular_user['id']}", headers=admin_headers)
    assert response.status_code == 200

    response = await client.get(
        "/api/dashboard/recent-activity?limit=50", headers=admin_headers
    )
    logins = [
        a for a in response.json()["data"]["activities"]
        if a["action"] == "login" and a["resource_id"] == regular_user["id"]
    ]
    assert len(logins) == 1
    assert logins[0]["user_id"] is None
    assert logins[0]["user_email"] is None


async def test_cannot_delete_last_admin(client: AsyncClient, admin_headers: dict, seeded) -> None:
    response = await client.delete(f"/api/users/{seeded.admin_user_id}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_DELETE_LAST_ADMIN"


async def test_delete_missing_user_is_404(client: AsyncClient, admin_headers: dict) -> None:
    response = await client.delete("/api/users/nope", headers=admin_headers)
    assert response.status_code == 404


async def test_user_without_permission_is_403(
    client: AsyncClient, user_headers: dict
) -> None:
    response = await client.get("/api/users", headers=user_headers)
    assert response.status_code == 403
    body = response.json()
    assert body["error"]["code"] == "PERMISSION_DENIED"
    assert body["error"]["details"] == {"permission": "users.read"}


async def test_deactivated_user_token_is_rejected(
    client: AsyncClient, admin_headers: dict, regular_user: dict, user_headers: dict
) -> None:
    await client.put(
        f"/api/users/{regular_user['id']}", json={"is_active": False}, headers=admin_headers
    )
    response = await client.get("/api/profile", headers=user_headers)
    assert response.status_code == 401


async def test_update_user_null_for_required_field_is_400(
    client: AsyncClient, admin_headers: dict, seeded
) -> None:
    for field in ("first_name", "last_name", "email", "is_active"):
        response = await client.put(
            f"/api/users/{seeded.admin_user_id}", json={field: None}, headers=admin_headers
        )
        assert response.status_code == 400, field
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert [e["field"] for e in error["details"]["errors"]] == [field]


async def test_update_user_can_clear_username(
    client: AsyncClient, admin_headers: dict, regular_user: dict
) -> None:
    response = await client.put(
        f"/api/users/{regular_user['id']}", json={"username": None}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["user"]["username"] is None


async def test_cannot_remove_admin_role_from_last_admin(
    client: AsyncClient, admin_headers: dict, seeded, user_role_id: str
) -> None:
    response = await client.put(
        f"/api/users/{seeded.admin_user_id}",
        json={"role_ids": [user_role_id]},
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_REMOVE_LAST_ADMIN"

    response = await client.get(f"/api/users/{seeded.admin_user_id}", headers=admin_headers)
    assert [r["name"] for r in response.json()["data"]["user"]["roles"]] == ["admin"]


async def test_cannot_deactivate_last_admin(
    client: AsyncClient, admin_headers: dict, seeded
) -> None:
    response = await client.put(
        f"/api/users/{seeded.admin_user_id}", json={"is_active": False}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_REMOVE_LAST_ADMIN"


async def test_admin_can_be_demoted_when_another_admin_exists(
    client: AsyncClient, admin_headers: dict, regular_user: dict, seeded, user_role_id: str
) -> None:
    response = await client.put(
        f"/api/users/{regular_user['id']}",
        json={"role_ids": [seeded.admin_role_id]},
        headers=admin_headers,
    )
    assert response.status_code == 200

    response = await client.put(
        f"/api/users/{seeded.admin_user_id}",
        json={"role_ids": [user_role_id]},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert [r["name"] for r in response.json()["data"]["user"]["roles"]] == ["user"]


async def test_inactive_admin_does_not_count_as_last_admin_holder(
    client: AsyncClient, admin_headers: dict, regular_user: dict, seeded
) -> None:
    await client.put(
        f"/api/users/{regular_user['id']}",
        json={"role_ids": [seeded.admin_role_id], "is_active": False},
        headers=admin_headers,
    )
    response = await client.delete(f"/api/users/{seeded.admin_user_id}", headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_DELETE_LAST_ADMIN"
