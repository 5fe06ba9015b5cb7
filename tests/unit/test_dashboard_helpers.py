"""Tests for dashboard date windows and growth percentage."""

from datetime import UTC, datetime

import pytest

from app.application.services.dashboard_service import (
    growth_percent,
    month_start,
    previous_month_start,
)


def test_month_start() -> None:
    now = datetime(2026, 10, 19, 15, 30, 12, 999, tzinfo=UTC)
    assert month_start(now) == datetime(2026, 10, 1, tzinfo=UTC)


@pytest.mark.parametrize(
    ("now", "expected"),
    [
        (datetime(2026, 10, 19, tzinfo=UTC), datetime(2026, 9, 1, tzinfo=UTC)),
        (datetime(2026, 1, 31, 23, 59, tzinfo=UTC), datetime(2025, 12, 1, tzinfo=UTC)),
        (datetime(2026, 3, 31, tzinfo=UTC), datetime(2026, 2, 1, tzinfo=UTC)),
    ],
)
def test_previous_month_start(now: datetime, expected: datetime) -> None:
    assert previous_month_start(now) == expected


@pytest.mark.parametrize(
    ("current", "previous", "expected"),
    [
        (0, 0, 0.0),
        (3, 0, 100.0),
        (6, 4, 50.0),
        (2, 4, -50.0),
        (1, 3, -66.7),
    ],
)
def test_growth_percent(current: int, previous: int, expected: float) -> None:
    assert growth_percent(current, previous) == expected
