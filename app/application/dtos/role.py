"""DTOs for role and permission management (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class PermissionResult:
    id: str
    name: str
    description: str | None


@dataclass(frozen=True)
class RoleResult:
    """Role read-model with its permission set and number of holders."""

    id: str
    name: str
    display_name: str
    description: str | None
    is_active: bool
    is_system: bool
    user_count: int
    created_at: datetime
    updated_at: datetime
    permissions: list[PermissionResult] = field(default_factory=list)


def permission_to_result(p: Any) -> PermissionResult:
    return PermissionResult(id=p.id, name=p.name, description=p.description)


def role_to_result(role: Any, *, user_count: int, is_system: bool) -> RoleResult:
    """Map an ORM Role (role_permissions -> permission loaded) to RoleResult."""
    permissions = sorted(
        (permission_to_result(rp.permission) for rp in role.role_permissions),
        key=lambda p: p.name,
    )
    return RoleResult(
        id=role.id,
        name=role.name,
        display_name=role.display_name,
        description=role.description,
        is_active=role.is_active,
        is_system=is_system,
        user_count=user_count,
        created_at=role.created_at,
        updated_at=role.updated_at,
        permissions=permissions,
    )
