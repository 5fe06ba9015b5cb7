"""Dashboard service: aggregate counts and the recent activity feed."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.dashboard import ActivityEntry
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    PermissionRepository,
    RoleRepository,
    SettingRepository,
    UserRepository,
)
from app.shared.utils.datetime import utc_now


def month_start(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def previous_month_start(now: datetime) -> datetime:
    start = month_start(now)
    if start.month == 1:
        return start.replace(year=start.year - 1, month=12)
    return start.replace(month=start.month - 1)


def growth_percent(current: int, previous: int) -> float:
    """Percent change from previous to current, one decimal.

    With no previous value, any growth counts as 100% and none as 0%.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 1)


class DashboardService:
    def __init__(self, db: AsyncSession) -> None:
        self._users = UserRepository(db)
        self._roles = RoleRepository(db)
        self._audit = AuditLogRepository(db)
        self._permissions = PermissionRepository(db)
        self._settings = SettingRepository(db)

    async def stats(self, now: datetime | None = None) -> dict[str, Any]:
        """Counts for users, roles, permissions, settings and audit activity."""
        now = now or utc_now()
        this_month = month_start(now)
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)

        user_stats = await self._users.stats()
        new_this_month = await self._users.count_created_between(this_month)
        new_last_month = await self._users.count_created_between(
            previous_month_start(now), this_month
        )
        return {
            "users": {
                "total": user_stats["total"],
                "active": user_stats["active"],
                "newThisMonth": new_this_month,
                "growth": growth_percent(new_this_month, new_last_month),
            },
            "roles": {
                "total": await self._roles.count(),
                "active": await self._roles.count(Role.is_active.is_(True)),
            },
            "permissions": {"total": await self._permissions.count()},
            "settings": {"total": await self._settings.count()},
            "activity": {
                "totalActions": await self._audit.count(),
                "todayActions": await self._audit.count_since(today),
            },
        }

    async def recent_activity(self, limit: int = 10) -> list[ActivityEntry]:
        return await self._audit.recent(limit)
