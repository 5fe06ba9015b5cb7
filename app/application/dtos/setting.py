"""DTO for application settings."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class SettingResult:
    id: str
    key: str
    value: str
    description: str | None
    category: str
    created_at: datetime
    updated_at: datetime


def setting_to_result(s: Any) -> SettingResult:
    return SettingResult(
        id=s.id,
        key=s.key,
        value=s.value,
        description=s.description,
        category=s.category,
        created_at=s.created_at,
        updated_at=s.updated_at,
    )
