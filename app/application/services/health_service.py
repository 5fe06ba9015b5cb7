"""Health reporting: process metrics plus a database connectivity check."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from app.core.config import Settings
from app.infrastructure.monitoring.process_metrics import (
    cpu_usage,
    memory_usage,
    process_uptime,
    runtime_info,
)
from app.schemas.health import (
    CpuUsage,
    DetailedHealthData,
    DetailedMemoryUsage,
    HealthChecks,
    HealthData,
    LivenessResponse,
    MemoryUsage,
    ReadinessResponse,
    SystemInfo,
)
from app.shared.enums import HealthStatus
from app.shared.utils.datetime import iso_timestamp

DatabaseCheck = Callable[[], Awaitable[bool]]


class HealthService:
    """Builds health payloads. Never mutates state; the check is injected."""

    def __init__(self, settings: Settings, database_check: DatabaseCheck) -> None:
        self._settings = settings
        self._database_check = database_check

    def basic(self) -> HealthData:
        return HealthData(
            status=HealthStatus.OK,
            timestamp=iso_timestamp(),
            uptime=process_uptime(),
            environment=self._settings.environment,
            version=self._settings.app_version,
            memory=MemoryUsage(**memory_usage()),
            cpu=CpuUsage(**cpu_usage()),
        )

    async def detailed(self) -> DetailedHealthData:
        """Run sub-checks; status is OK only when every check is OK, else DEGRADED."""
        database_ok = await self._database_check()
        checks = HealthChecks(
            database=HealthStatus.OK if database_ok else HealthStatus.ERROR,
        )
        return DetailedHealthData(
            status=HealthStatus.OK if checks.all_ok else HealthStatus.DEGRADED,
            timestamp=iso_timestamp(),
            uptime=process_uptime(),
            environment=self._settings.environment,
            version=self._settings.app_version,
            checks=checks,
            system=SystemInfo(
                memory=DetailedMemoryUsage(**memory_usage(include_rss=True)),
                cpu=CpuUsage(**cpu_usage()),
                **runtime_info(),
            ),
        )

    async def is_ready(self) -> bool:
        # Readiness is not gated on dependencies yet; only the process must be up.
        return True

    def readiness(self, ready: bool) -> ReadinessResponse:
        return ReadinessResponse(
            success=ready,
            message="Service is ready" if ready else "Service is not ready",
            timestamp=iso_timestamp(),
        )

    def liveness(self) -> LivenessResponse:
        return LivenessResponse(timestamp=iso_timestamp(), uptime=process_uptime())
