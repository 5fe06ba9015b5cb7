"""DTOs for dashboard statistics and activity feed."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ActivityEntry:
    """One audit_log row with the acting user's email (None when the user was deleted)."""

    id: str
    action: str
    resource: str
    resource_id: str | None
    user_id: str | None
    user_email: str | None
    details: dict[str, Any] | None
    created_at: datetime
