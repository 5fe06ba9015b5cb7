"""Settings service: read and edit the key/value application settings."""

from __future__ import annotations

from typing import Any

from app.application.dtos.setting import SettingResult, setting_to_result
from app.application.services.user_service import Actor
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories import (
    AuditLogRepository,
    SettingRepository,
)
from app.shared.enums import AuditAction, AuditResource
from app.shared.logging import get_logger

logger = get_logger(__name__)

SettingValue = str | int | float | bool


def encode_setting_value(value: SettingValue) -> str:
    """Store values as strings; booleans as 'true'/'false'."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SettingService:
    def __init__(self, setting_repo: SettingRepository, audit_repo: AuditLogRepository) -> None:
        self._setting_repo = setting_repo
        self._audit_repo = audit_repo

    async def list_settings(self, category: str | None = None) -> list[SettingResult]:
        return [setting_to_result(s) for s in await self._setting_repo.list_settings(category)]

    async def get_setting(self, key: str) -> SettingResult:
        """Return setting by key. Raises ResourceNotFoundException (SETTING_NOT_FOUND)."""
        setting = await self._setting_repo.get_by_key(key)
        if not setting:
            raise ResourceNotFoundException("setting", key)
        return setting_to_result(setting)

    async def update_setting(
        self, key: str, changes: dict[str, Any], *, actor: Actor
    ) -> SettingResult:
        """Update value and/or description of an existing setting."""
        setting = await self._setting_repo.get_by_key(key)
        if not setting:
            raise ResourceNotFoundException("setting", key)

        details: dict[str, Any] = {"key": key, "fields": sorted(changes)}
        if "value" in changes:
            details["previous_value"] = setting.value
            setting.value = encode_setting_value(changes["value"])
            details["value"] = setting.value
        if "description" in changes:
            setting.description = changes["description"]
        await self._setting_repo.update(setting)

        await self._audit_repo.record(
            AuditAction.SETTING_UPDATE,
            AuditResource.SETTING,
            user_id=actor.user_id,
            resource_id=setting.id,
            details=details,
            ip_address=actor.ip_address,
        )
        logger.info("Setting updated: %s (%s)", key, ", ".join(sorted(changes)) or "no fields")
        return setting_to_result(setting)
