"""Request-scoped dependencies (composition root): sessions, services, auth, RBAC."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult, user_to_result
from app.application.services import (
    Actor,
    AuthService,
    DashboardService,
    DatabaseCheck,
    HealthService,
    ProfileService,
    RoleService,
    SettingService,
    UserService,
)
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
    ping_database,
)
from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    PermissionRepository,
    RoleRepository,
    SettingRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import decode_access_token

_http_bearer = HTTPBearer(auto_error=False)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


def get_database_check() -> DatabaseCheck:
    """Connectivity check used by the detailed health check (override in tests)."""
    return ping_database


def get_health_service(
    check: Annotated[DatabaseCheck, Depends(get_database_check)],
) -> HealthService:
    return HealthService(get_settings(), check)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    db: ReadSession,
) -> UserResult:
    """Return current user (roles and permissions resolved) from the bearer JWT.

    Raises AuthenticationException when the token is missing, invalid, or the
    user no longer exists or is inactive.
    """
    if not credentials:
        raise AuthenticationException("Not authenticated")
    claims = decode_access_token(credentials.credentials)
    user = await UserRepository(db).get_with_roles(claims.user_id)
    if not user or not user.is_active:
        raise AuthenticationException("User not found or inactive")
    return user_to_result(user)


CurrentUser = Annotated[UserResult, Depends(get_current_user)]


def require_permission(permission: str):
    """Dependency factory: require JWT auth and that the user holds permission."""

    async def _require(current_user: CurrentUser) -> UserResult:
        if permission not in current_user.permissions:
            raise AuthorizationException(permission)
        return current_user

    return _require


def get_actor(request: Request, current_user: CurrentUser) -> Actor:
    client = request.client
    return Actor(user_id=current_user.id, ip_address=client.host if client else None)


def get_auth_service(db: WriteSession) -> AuthService:
    return AuthService(UserRepository(db), AuditLogRepository(db))


def get_user_service(db: WriteSession) -> UserService:
    return UserService(UserRepository(db), RoleRepository(db), AuditLogRepository(db))


def get_user_query_service(db: ReadSession) -> UserService:
    """UserService on a read-only session (list, stats, get)."""
    return UserService(UserRepository(db), RoleRepository(db), AuditLogRepository(db))


def get_profile_service(db: WriteSession) -> ProfileService:
    return ProfileService(UserRepository(db), AuditLogRepository(db))


def get_dashboard_service(db: ReadSession) -> DashboardService:
    return DashboardService(db)


def get_role_service(db: WriteSession) -> RoleService:
    return RoleService(RoleRepository(db), PermissionRepository(db), AuditLogRepository(db))


def get_role_query_service(db: ReadSession) -> RoleService:
    return RoleService(RoleRepository(db), PermissionRepository(db), AuditLogRepository(db))


def get_setting_service(db: WriteSession) -> SettingService:
    return SettingService(SettingRepository(db), AuditLogRepository(db))


def get_setting_query_service(db: ReadSession) -> SettingService:
    return SettingService(SettingRepository(db), AuditLogRepository(db))
