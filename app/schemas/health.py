"""Health check API schemas."""

from pydantic import BaseModel, Field

from app.shared.enums import HealthStatus


class MemoryUsage(BaseModel):
    """Process memory in MB (2 decimals)."""

    used: float = Field(..., description="Resident set size")
    total: float = Field(..., description="Virtual memory size")
    external: float = Field(..., description="Shared memory (0 when unavailable)")


class DetailedMemoryUsage(MemoryUsage):
    rss: float = Field(..., description="Resident set size")


class CpuUsage(BaseModel):
    """Process CPU time in microseconds."""

    user: int
    system: int


class HealthData(BaseModel):
    status: HealthStatus = HealthStatus.OK
    timestamp: str
    uptime: float
    environment: str
    version: str
    memory: MemoryUsage
    cpu: CpuUsage


class HealthResponse(BaseModel):
    """Response for GET /health."""

    success: bool = True
    data: HealthData


class HealthChecks(BaseModel):
    """Per-subsystem status. redis and storage are not checked and always report OK."""

    server: HealthStatus = HealthStatus.OK
    database: HealthStatus
    redis: HealthStatus = HealthStatus.OK
    storage: HealthStatus = HealthStatus.OK

    @property
    def all_ok(self) -> bool:
        return all(
            status == HealthStatus.OK
            for status in (self.server, self.database, self.redis, self.storage)
        )


class SystemInfo(BaseModel):
    memory: DetailedMemoryUsage
    cpu: CpuUsage
    platform: str
    arch: str
    python_version: str


class DetailedHealthData(BaseModel):
    status: HealthStatus
    timestamp: str
    uptime: float
    environment: str
    version: str
    checks: HealthChecks
    system: SystemInfo


class DetailedHealthResponse(BaseModel):
    """Response for GET /health/detailed (200 when all checks are OK, else 503)."""

    success: bool
    data: DetailedHealthData


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready (200 ready, 503 not ready)."""

    success: bool = True
    message: str = Field(default="Service is ready")
    timestamp: str


class LivenessResponse(BaseModel):
    """Response for GET /health/live."""

    success: bool = True
    message: str = Field(default="Service is alive")
    timestamp: str
    uptime: float
