"""Tests for the seed entry point and its exit codes."""

import os

import pytest
from pydantic import SecretStr
from sqlalchemy import func, select

from app.core.config import Settings, get_settings
from app.infrastructure.persistence import database
from app.infrastructure.persistence.models import Role
from scripts import seed as seed_script


async def test_seed_exits_zero_and_is_repeatable(database_ready) -> None:
    settings = get_settings()
    assert await seed_script.seed(settings) == 0
    assert await seed_script.seed(settings) == 0

    assert database.AsyncSessionLocal is not None
    async with database.AsyncSessionLocal() as session:
        roles = await session.execute(select(func.count()).select_from(Role))
        assert roles.scalar_one() == 2


async def test_seed_exits_one_when_tables_missing(tmp_path) -> None:
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}",
        secret_key=SecretStr("x"),
    )
    assert await seed_script.seed(settings) == 1


def test_main_exits_one_on_invalid_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "")
    get_settings.cache_clear()
    try:
        assert seed_script.main() == 1
    finally:
        monkeypatch.undo()
        get_settings.cache_clear()
    assert os.environ["DATABASE_URL"]
