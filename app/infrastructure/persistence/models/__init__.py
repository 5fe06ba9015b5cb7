"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.setting import Setting
from app.infrastructure.persistence.models.user import User

__all__ = [
    "AuditLog",
    "User",
    "Role",
    "Permission",
    "RolePermission",
    "UserRole",
    "Setting",
    "CuidMixin",
    "TimestampMixin",
]
