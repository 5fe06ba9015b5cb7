"""Application DTOs: plain read-models returned by services (no ORM)."""

from app.application.dtos.dashboard import ActivityEntry
from app.application.dtos.role import (
    PermissionResult,
    RoleResult,
    permission_to_result,
    role_to_result,
)
from app.application.dtos.setting import SettingResult, setting_to_result
from app.application.dtos.user import RoleSummary, UserPage, UserResult, user_to_result

__all__ = [
    "ActivityEntry",
    "PermissionResult",
    "RoleResult",
    "RoleSummary",
    "SettingResult",
    "UserPage",
    "UserResult",
    "permission_to_result",
    "role_to_result",
    "setting_to_result",
    "user_to_result",
]
