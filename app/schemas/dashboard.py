"""Dashboard API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from app.schemas.common import UtcDatetime


class UserCounts(BaseModel):
    total: int
    active: int
    newThisMonth: int
    growth: float


class RoleCounts(BaseModel):
    total: int
    active: int


class Total(BaseModel):
    total: int


class ActivityCounts(BaseModel):
    totalActions: int
    todayActions: int


class DashboardStats(BaseModel):
    users: UserCounts
    roles: RoleCounts
    permissions: Total
    settings: Total
    activity: ActivityCounts


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    action: str
    resource: str
    resource_id: str | None
    user_id: str | None
    user_email: str | None
    details: dict[str, Any] | None
    created_at: UtcDatetime


class RecentActivityData(BaseModel):
    activities: list[ActivityOut]
