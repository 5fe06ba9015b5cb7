"""Pydantic request/response schemas for the API."""

from app.schemas.auth import LoginData, LoginRequest
from app.schemas.common import ApiResponse, ErrorResponse, MessageResponse
from app.schemas.dashboard import DashboardStats, RecentActivityData
from app.schemas.health import (
    DetailedHealthResponse,
    HealthResponse,
    LivenessResponse,
    ReadinessResponse,
)
from app.schemas.profile import PasswordChangeRequest, ProfileUpdateRequest
from app.schemas.role import (
    PermissionOut,
    RoleCreateRequest,
    RoleData,
    RoleDetailOut,
    RoleListParams,
    RoleUpdateRequest,
)
from app.schemas.setting import (
    SettingData,
    SettingListParams,
    SettingOut,
    SettingUpdateRequest,
)
from app.schemas.user import (
    UserCreateRequest,
    UserData,
    UserListParams,
    UserListResponse,
    UserOut,
    UserStats,
    UserUpdateRequest,
)

__all__ = [
    "ApiResponse",
    "DashboardStats",
    "DetailedHealthResponse",
    "ErrorResponse",
    "HealthResponse",
    "LivenessResponse",
    "LoginData",
    "LoginRequest",
    "MessageResponse",
    "PasswordChangeRequest",
    "PermissionOut",
    "ProfileUpdateRequest",
    "ReadinessResponse",
    "RecentActivityData",
    "RoleCreateRequest",
    "RoleData",
    "RoleDetailOut",
    "RoleListParams",
    "RoleUpdateRequest",
    "SettingData",
    "SettingListParams",
    "SettingOut",
    "SettingUpdateRequest",
    "UserCreateRequest",
    "UserData",
    "UserListParams",
    "UserListResponse",
    "UserOut",
    "UserStats",
    "UserUpdateRequest",
]
