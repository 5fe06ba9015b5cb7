"""Repositories: data access over the async session (flush only, never commit)."""

from app.infrastructure.persistence.repositories.audit_log_repo import AuditLogRepository
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.role_repo import (
    PermissionRepository,
    RoleRepository,
)
from app.infrastructure.persistence.repositories.setting_repo import SettingRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AuditLogRepository",
    "BaseRepository",
    "PermissionRepository",
    "RoleRepository",
    "SettingRepository",
    "UserRepository",
]
