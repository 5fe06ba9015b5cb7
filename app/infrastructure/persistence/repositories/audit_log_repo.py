"""Audit log repository. Append-only: record and read back recent activity."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.dashboard import ActivityEntry
from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.enums import AuditAction, AuditResource


class AuditLogRepository(BaseRepository[AuditLog]):
    """Append-only audit log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AuditLog)

    async def record(
        self,
        action: AuditAction,
        resource: AuditResource,
        *,
        user_id: str | None = None,
        resource_id: str | None = None,
        details: dict[str, Any] | None = None,
        ip_address: str | None = None,
    ) -> AuditLog:
        """Append one audit log entry."""
        row = AuditLog(
            user_id=user_id,
            action=action.value,
            resource=resource.value,
            resource_id=resource_id,
            details=details,
            ip_address=ip_address,
        )
        return await self.create(row)

    async def recent(self, limit: int = 10) -> list[ActivityEntry]:
        """Newest entries first, joined with the acting user's email."""
        result = await self.db.execute(
            select(AuditLog, User.email)
            .outerjoin(User, AuditLog.user_id == User.id)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
        )
        return [
            ActivityEntry(
                id=row.id,
                action=row.action,
                resource=row.resource,
                resource_id=row.resource_id,
                user_id=row.user_id,
                user_email=email,
                details=row.details,
                created_at=row.created_at,
            )
            for row, email in result.all()
        ]

    async def count_since(self, start: datetime) -> int:
        return await self.count(AuditLog.created_at >= start)
