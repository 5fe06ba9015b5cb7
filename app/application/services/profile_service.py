"""Profile service: the current user reads and edits their own account."""

from __future__ import annotations

import asyncio
from typing import Any

from app.application.dtos.user import UserResult, user_to_result
from app.application.services.user_service import Actor
from app.domain import ValidationException
from app.domain.exceptions import ConflictException, ResourceNotFoundException
from app.infrastructure.persistence.repositories import AuditLogRepository, UserRepository
from app.infrastructure.security.password import (
    get_password_hash,
    password_strength_errors,
    verify_password,
)
from app.shared.enums import AuditAction, AuditResource
from app.shared.utils.datetime import utc_now

PROFILE_FIELDS = ("email", "username", "first_name", "last_name", "avatar")


class ProfileService:
    def __init__(self, user_repo: UserRepository, audit_repo: AuditLogRepository) -> None:
        self._user_repo = user_repo
        self._audit_repo = audit_repo

    async def get_profile(self, user_id: str) -> UserResult:
        user = await self._user_repo.get_with_roles(user_id)
        if not user:
            raise ResourceNotFoundException("user", user_id)
        return user_to_result(user)

    async def update_profile(
        self, user_id: str, changes: dict[str, Any], *, actor: Actor
    ) -> UserResult:
        """Update own profile fields; email/username must stay unique."""
        user = await self._user_repo.get_by_id(user_id)
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

        for field_name in PROFILE_FIELDS:
            if field_name in changes:
                setattr(user, field_name, changes[field_name])
        await self._user_repo.update(user)
        await self._audit_repo.record(
            AuditAction.PROFILE_UPDATE,
            AuditResource.USER,
            user_id=actor.user_id,
            resource_id=user_id,
            details={"fields": sorted(k for k in changes if k in PROFILE_FIELDS)},
            ip_address=actor.ip_address,
        )
        return await self.get_profile(user_id)

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
        *,
        actor: Actor,
    ) -> None:
        """Change own password.

        Raises ValidationException when the current password is wrong, the new
        one is weak, or the new one equals the current one.
        """
        user = await self._user_repo.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundException("user", user_id)
        if not await asyncio.to_thread(
            verify_password, current_password, user.hashed_password
        ):
            raise ValidationException(
                "Current password is incorrect",
                field="current_password",
                error_code="INVALID_CURRENT_PASSWORD",
            )
        errors = password_strength_errors(new_password)
        if errors:
            raise ValidationException(
                "New password does not meet requirements",
                field="new_password",
                error_code="WEAK_PASSWORD",
                errors=errors,
            )
        if new_password == current_password:
            raise ValidationException(
                "New password must be different from the current password",
                field="new_password",
                error_code="PASSWORD_UNCHANGED",
            )

        user.hashed_password = await asyncio.to_thread(get_password_hash, new_password)
        user.password_changed_at = utc_now()
        await self._user_repo.update(user)
        await self._audit_repo.record(
            AuditAction.PASSWORD_CHANGE,
            AuditResource.USER,
            user_id=actor.user_id,
            resource_id=user_id,
            ip_address=actor.ip_address,
        )
