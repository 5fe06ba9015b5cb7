"""Shared utilities: logging, enums and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.enums import AuditAction, AuditResource, HealthStatus
from app.shared.utils import ensure_utc, generate_cuid, iso_timestamp, utc_now

__all__ = [
    "AuditAction",
    "AuditResource",
    "HealthStatus",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "iso_timestamp",
]
