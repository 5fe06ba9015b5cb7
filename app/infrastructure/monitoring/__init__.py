"""Process and runtime metrics reported by the health endpoints."""

from app.infrastructure.monitoring.process_metrics import (
    cpu_usage,
    memory_usage,
    process_uptime,
    runtime_info,
)

__all__ = ["cpu_usage", "memory_usage", "process_uptime", "runtime_info"]
