"""Shared enumerations for the WebCore application.

Cross-cutting enums used by application and infrastructure (audit trail,
health status).
"""

from enum import Enum


class AuditAction(str, Enum):
    """Audit action types recorded in audit_log.action."""

    LOGIN = "login"
    USER_CREATE = "user_create"
    USER_UPDATE = "user_update"
    USER_DELETE = "user_delete"
    PROFILE_UPDATE = "profile_update"
    PASSWORD_CHANGE = "password_change"
    ROLE_CREATE = "role_create"
    ROLE_UPDATE = "role_update"
    ROLE_DELETE = "role_delete"
    SETTING_UPDATE = "setting_update"


class AuditResource(str, Enum):
    """Resource types recorded in audit_log.resource."""

    AUTH = "auth"
    USER = "user"
    ROLE = "role"
    SETTING = "setting"


class HealthStatus(str, Enum):
    """Status values reported by health checks (individual and aggregate)."""

    OK = "OK"
    ERROR = "ERROR"
    DEGRADED = "DEGRADED"
