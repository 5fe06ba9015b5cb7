"""Role management: list, get, create, update, delete, permission assignment."""

from __future__ import annotations

from typing import Any

from app.application.dtos.role import (
    PermissionResult,
    RoleResult,
    permission_to_result,
    role_to_result,
)
from app.application.services.user_service import Actor
from app.domain import ValidationException
from app.domain.exceptions import ConflictException, ResourceNotFoundException
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    PermissionRepository,
    RoleRepository,
)
from app.infrastructure.services.seed_service import DEFAULT_ROLES
from app.shared.enums import AuditAction, AuditResource
from app.shared.logging import get_logger

logger = get_logger(__name__)

SYSTEM_ROLES = frozenset(DEFAULT_ROLES)
# Seeded roles keep their name, status and permission set.
SYSTEM_ROLE_LOCKED_FIELDS = ("name", "is_active", "permission_ids")
ROLE_FIELDS = ("name", "display_name", "description", "is_active")


class RoleService:
    """Role management. Raises domain exceptions; never commits."""

    def __init__(
        self,
        role_repo: RoleRepository,
        permission_repo: PermissionRepository,
        audit_repo: AuditLogRepository,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._audit_repo = audit_repo

    async def list_roles(self, search: str | None = None) -> list[RoleResult]:
        roles = await self._role_repo.list_roles(search)
        counts = await self._role_repo.user_counts([r.id for r in roles])
        return [self._to_result(r, counts[r.id]) for r in roles]

    async def list_permissions(self) -> list[PermissionResult]:
        return [permission_to_result(p) for p in await self._permission_repo.list_permissions()]

    async def get_role(self, role_id: str) -> RoleResult:
        """Return role by id. Raises ResourceNotFoundException if missing."""
        role = await self._role_repo.get_with_permissions(role_id)
        if not role:
            raise ResourceNotFoundException("role", role_id)
        counts = await self._role_repo.user_counts([role_id])
        return self._to_result(role, counts[role_id])

    async def create_role(
        self,
        *,
        name: str,
        display_name: str,
        description: str | None = None,
        is_active: bool = True,
        permission_ids: list[str] | None = None,
        actor: Actor,
    ) -> RoleResult:
        """Create a role with its permission set.

        Raises ConflictException when the name is taken and ValidationException
        when a permission id does not exist.
        """
        name = name.strip().lower()
        if await self._role_repo.get_by_name(name):
            raise ConflictException("name", error_code="ROLE_NAME_EXISTS")
        permission_ids = await self._validate_permission_ids(permission_ids or [])

        role = await self._role_repo.create(
            Role(
                name=name,
                display_name=display_name,
                description=description,
                is_active=is_active,
            )
        )
        await self._role_repo.replace_permissions(role.id, permission_ids)
        await self._audit_repo.record(
            AuditAction.ROLE_CREATE,
            AuditResource.ROLE,
            user_id=actor.user_id,
            resource_id=role.id,
            details={"name": name, "permission_ids": permission_ids},
            ip_address=actor.ip_address,
        )
        logger.info("Role created: %s (%s, %d permissions)", role.id, name, len(permission_ids))
        return await self.get_role(role.id)

    async def update_role(
        self, role_id: str, changes: dict[str, Any], *, actor: Actor
    ) -> RoleResult:
        """Partial update; permission_ids replaces the whole permission set when present."""
        role = await self._role_repo.get_by_id(role_id)
        if not role:
            raise ResourceNotFoundException("role", role_id)
        if role.name in SYSTEM_ROLES:
            locked = sorted(f for f in SYSTEM_ROLE_LOCKED_FIELDS if f in changes)
            if locked:
                raise ValidationException(
                    f"Cannot change {', '.join(locked)} of system role '{role.name}'",
                    error_code="SYSTEM_ROLE_IMMUTABLE",
                    errors=locked,
                )

        if changes.get("name"):
            changes["name"] = changes["name"].strip().lower()
            if changes["name"] != role.name and await self._role_repo.get_by_name(
                changes["name"]
            ):
                raise ConflictException("name", error_code="ROLE_NAME_EXISTS")
        permission_ids = changes.pop("permission_ids", None)
        if permission_ids is not None:
            permission_ids = await self._validate_permission_ids(permission_ids)

        for field_name in ROLE_FIELDS:
            if field_name in changes:
                setattr(role, field_name, changes[field_name])
        await self._role_repo.update(role)
        if permission_ids is not None:
            await self._role_repo.replace_permissions(role_id, permission_ids)
            changes["permission_ids"] = permission_ids

        await self._audit_repo.record(
            AuditAction.ROLE_UPDATE,
            AuditResource.ROLE,
            user_id=actor.user_id,
            resource_id=role_id,
            details={"fields": sorted(changes)},
            ip_address=actor.ip_address,
        )
        return await self.get_role(role_id)

    async def delete_role(self, role_id: str, *, actor: Actor) -> None:
        """Delete a custom role nobody holds."""
        role = await self._role_repo.get_by_id(role_id)
        if not role:
            raise ResourceNotFoundException("role", role_id)
        if role.name in SYSTEM_ROLES:
            raise ValidationException(
                f"Cannot delete system role '{role.name}'",
                error_code="SYSTEM_ROLE_IMMUTABLE",
            )
        holders = (await self._role_repo.user_counts([role_id]))[role_id]
        if holders:
            raise ValidationException(
                f"Role is assigned to {holders} user(s)", error_code="ROLE_IN_USE"
            )

        name = role.name
        await self._role_repo.delete_role(role_id)
        await self._audit_repo.record(
            AuditAction.ROLE_DELETE,
            AuditResource.ROLE,
            user_id=actor.user_id,
            resource_id=role_id,
            details={"name": name},
            ip_address=actor.ip_address,
        )
        logger.info("Role deleted: %s (%s)", role_id, name)

    async def _validate_permission_ids(self, permission_ids: list[str]) -> list[str]:
        unique_ids = list(dict.fromkeys(permission_ids))
        found = {p.id for p in await self._permission_repo.get_by_ids(unique_ids)}
        missing = [pid for pid in unique_ids if pid not in found]
        if missing:
            raise ValidationException(
                "One or more permissions are invalid",
                field="permission_ids",
                error_code="INVALID_PERMISSIONS",
                errors=missing,
            )
        return unique_ids

    @staticmethod
    def _to_result(role: Role, user_count: int) -> RoleResult:
        return role_to_result(
            role, user_count=user_count, is_system=role.name in SYSTEM_ROLES
        )
