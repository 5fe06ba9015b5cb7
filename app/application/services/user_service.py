"""User management service: list, stats, get, create, update, delete with audit."""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from typing import Any

from app.application.dtos.user import UserPage, UserResult, user_to_result
from app.domain import ValidationException
from app.domain.exceptions import ConflictException, ResourceNotFoundException
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    RoleRepository,
    UserRepository,
)
from app.infrastructure.security.password import get_password_hash
from app.infrastructure.services.seed_service import ADMIN_ROLE
from app.shared.enums import AuditAction, AuditResource
from app.shared.logging import get_logger

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("email", "username", "first_name", "last_name", "avatar", "is_active")


@dataclass(frozen=True)
class Actor:
    """Who is performing a mutation (for the audit trail)."""

    user_id: str | None
    ip_address: str | None = None


def pagination_meta(page: UserPage) -> dict[str, Any]:
    total_pages = math.ceil(page.total / page.limit) if page.limit else 0
    return {
        "page": page.page,
        "limit": page.limit,
        "total": page.total,
        "totalPages": total_pages,
        "hasNext": page.page < total_pages,
        "hasPrev": page.page > 1,
    }


class UserService:
    """Admin user management. Raises domain exceptions; never commits."""

    def __init__(
        self,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        audit_repo: AuditLogRepository,
    ) -> None:
        self._user_repo = user_repo
        self._role_repo = role_repo
        self._audit_repo = audit_repo

    async def list_users(
        self,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> UserPage:
        users, total = await self._user_repo.list_users(
            page=page,
            limit=limit,
            search=search,
            sort_by=sort_by,  # type: ignore[arg-type]
            sort_order=sort_order,  # type: ignore[arg-type]
        )
        return UserPage(
            items=[user_to_result(u) for u in users], total=total, page=page, limit=limit
        )

    async def stats(self) -> dict[str, int]:
        return await self._user_repo.stats()

    async def get_user(self, user_id: str) -> UserResult:
        """Return user by id. Raises ResourceNotFoundException if missing."""
        user = await self._user_repo.get_with_roles(user_id)
        if not user:
            raise ResourceNotFoundException("user", user_id)
        return user_to_result(user)

    async def create_user(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        username: str | None = None,
        role_ids: list[str] | None = None,
        is_active: bool = True,
        actor: Actor,
    ) -> UserResult:
        """Create user with hashed password and role assignments.

        Raises ConflictException on duplicate email/username and
        ValidationException when a role id does not exist.
        """
        email = email.lower()
        username = username.lower() if username else None
        conflict = await self._user_repo.find_conflict(email, username)
        if conflict:
            raise ConflictException(conflict)
        role_ids = await self._validate_role_ids(role_ids or [])

        hashed = await asyncio.to_thread(get_password_hash, password)
        user = await self._user_repo.create(
            User(
                email=email,
                username=username,
                hashed_password=hashed,
                first_name=first_name,
                last_name=last_name,
                is_active=is_active,
            )
        )
        if role_ids:
            await self._user_repo.replace_roles(user.id, role_ids)
        await self._audit_repo.record(
            AuditAction.USER_CREATE,
            AuditResource.USER,
            user_id=actor.user_id,
            resource_id=user.id,
            details={"email": email, "role_ids": role_ids},
            ip_address=actor.ip_address,
        )
        logger.info("User created: %s (%s)", user.id, email)
        return await self.get_user(user.id)

    async def update_user(
        self,
        user_id: str,
        changes: dict[str, Any],
        *,
        actor: Actor,
    ) -> UserResult:
        """Apply a partial update. role_ids, when present, replaces assignments.

        Raises ValidationException when the change would leave no active
        admin (role removed or account deactivated).
        """
        user = await self._user_repo.get_with_roles(user_id)
        if not user:
            raise ResourceNotFoundException("user", user_id)

        if changes.get("email"):
            changes["email"] = changes["email"].lower()
        if changes.get("username"):
            changes["username"] = changes["username"].lower()
        conflict = await self._user_repo.find_conflict(
            changes.get("email"), changes.get("username"), exclude_id=user_id
        )
        if conflict:
            raise ConflictException(conflict)

        role_ids = changes.pop("role_ids", None)
        if role_ids is not None:
            role_ids = await self._validate_role_ids(role_ids)
        await self._guard_last_admin_update(user, role_ids, changes.get("is_active"))

        for field_name in UPDATABLE_FIELDS:
            if field_name in changes:
                setattr(user, field_name, changes[field_name])
        if role_ids is not None:
            await self._user_repo.replace_roles(user_id, role_ids)
            changes["role_ids"] = role_ids
        await self._user_repo.update(user)

        await self._audit_repo.record(
            AuditAction.USER_UPDATE,
            AuditResource.USER,
            user_id=actor.user_id,
            resource_id=user_id,
            details={"fields": sorted(changes)},
            ip_address=actor.ip_address,
        )
        return await self.get_user(user_id)

    async def delete_user(self, user_id: str, *, actor: Actor) -> None:
        """Delete user. Refuses to delete the last active admin."""
        user = await self._user_repo.get_with_roles(user_id)
        if not user:
            raise ResourceNotFoundException("user", user_id)
        if _is_active_admin(user) and await self._role_repo.count_holders(ADMIN_ROLE) <= 1:
            raise ValidationException(
                "Cannot delete the last admin user", error_code="CANNOT_DELETE_LAST_ADMIN"
            )
        email = user.email
        await self._user_repo.delete_user(user_id)
        await self._audit_repo.record(
            AuditAction.USER_DELETE,
            AuditResource.USER,
            user_id=actor.user_id if actor.user_id != user_id else None,
            resource_id=user_id,
            details={"email": email},
            ip_address=actor.ip_address,
        )
        logger.info("User deleted: %s (%s)", user_id, email)

    async def _validate_role_ids(self, role_ids: list[str]) -> list[str]:
        unique_ids = list(dict.fromkeys(role_ids))
        found = {r.id for r in await self._role_repo.get_by_ids(unique_ids)}
        missing = [rid for rid in unique_ids if rid not in found]
        if missing:
            raise ValidationException(
                "One or more roles are invalid",
                field="role_ids",
                error_code="INVALID_ROLES",
                errors=missing,
            )
        return unique_ids

    async def _guard_last_admin_update(
        self, user: User, role_ids: list[str] | None, is_active: bool | None
    ) -> None:
        if not _is_active_admin(user):
            return
        loses_admin = is_active is False
        if role_ids is not None and not loses_admin:
            admin_role = await self._role_repo.get_by_name(ADMIN_ROLE)
            loses_admin = admin_role is not None and admin_role.id not in role_ids
        if loses_admin and await self._role_repo.count_holders(ADMIN_ROLE) <= 1:
            raise ValidationException(
                "Cannot remove admin access from the last admin user",
                error_code="CANNOT_REMOVE_LAST_ADMIN",
            )


def _is_active_admin(user: User) -> bool:
    return user.is_active and any(ur.role.name == ADMIN_ROLE for ur in user.user_roles)
