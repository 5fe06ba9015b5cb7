"""Application services: auth, users, roles, settings, profile, dashboard, health."""

from app.application.services.auth_service import AuthService, LoginResult
from app.application.services.dashboard_service import DashboardService
from app.application.services.health_service import DatabaseCheck, HealthService
from app.application.services.profile_service import ProfileService
from app.application.services.role_service import RoleService
from app.application.services.setting_service import SettingService
from app.application.services.user_service import Actor, UserService, pagination_meta

__all__ = [
    "Actor",
    "AuthService",
    "DashboardService",
    "DatabaseCheck",
    "HealthService",
    "LoginResult",
    "ProfileService",
    "RoleService",
    "SettingService",
    "UserService",
    "pagination_meta",
]
