"""Tests for psutil-backed process metrics."""

from app.infrastructure.monitoring.process_metrics import (
    bytes_to_mb,
    cpu_usage,
    memory_usage,
    process_uptime,
    runtime_info,
)


def test_bytes_to_mb_rounds_to_two_decimals() -> None:
    assert bytes_to_mb(1024 * 1024) == 1.0
    assert bytes_to_mb(1536 * 1024) == 1.5
    assert bytes_to_mb(1234567) == 1.18
    assert bytes_to_mb(0) == 0.0


def test_memory_usage_keys() -> None:
    usage = memory_usage()
    assert set(usage) == {"used", "total", "external"}
    assert usage["used"] > 0
    assert all(round(v, 2) == v for v in usage.values())


def test_memory_usage_with_rss() -> None:
    usage = memory_usage(include_rss=True)
    assert "rss" in usage
    assert usage["rss"] > 0


def test_cpu_usage_in_microseconds() -> None:
    cpu = cpu_usage()
    assert set(cpu) == {"user", "system"}
    assert all(isinstance(v, int) and v >= 0 for v in cpu.values())


def test_uptime_non_negative_and_monotonic() -> None:
    first = process_uptime()
    assert first >= 0
    assert process_uptime() >= first


def test_runtime_info() -> None:
    info = runtime_info()
    assert set(info) == {"platform", "arch", "python_version"}
    assert info["python_version"].count(".") == 2
