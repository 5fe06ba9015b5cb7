"""DTOs for user use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class RoleSummary:
    """Role as embedded in a user read-model."""

    id: str
    name: str
    display_name: str


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get, create, update). No password hash."""

    id: str
    email: str
    username: str | None
    first_name: str
    last_name: str
    avatar: str | None
    is_active: bool
    is_email_verified: bool
    last_login_at: datetime | None
    password_changed_at: datetime | None
    created_at: datetime
    updated_at: datetime
    roles: list[RoleSummary] = field(default_factory=list)
    permissions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UserPage:
    """One page of users plus the total matching count."""

    items: list[UserResult]
    total: int
    page: int
    limit: int


def user_to_result(u: Any) -> UserResult:
    """Map an ORM User (with user_roles -> role -> role_permissions loaded) to UserResult."""
    roles: list[RoleSummary] = []
    permissions: set[str] = set()
    for assignment in u.user_roles:
        role = assignment.role
        roles.append(RoleSummary(id=role.id, name=role.name, display_name=role.display_name))
        if role.is_active:
            permissions.update(rp.permission.name for rp in role.role_permissions)
    return UserResult(
        id=u.id,
        email=u.email,
        username=u.username,
        first_name=u.first_name,
        last_name=u.last_name,
        avatar=u.avatar,
        is_active=u.is_active,
        is_email_verified=u.is_email_verified,
        last_login_at=u.last_login_at,
        password_changed_at=u.password_changed_at,
        created_at=u.created_at,
        updated_at=u.updated_at,
        roles=sorted(roles, key=lambda r: r.name),
        permissions=sorted(permissions),
    )
