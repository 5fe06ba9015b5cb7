"""Setting repository: key lookups and category listing."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.setting import Setting
from app.infrastructure.persistence.repositories.base import BaseRepository


class SettingRepository(BaseRepository[Setting]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Setting)

    async def get_by_key(self, key: str) -> Setting | None:
        result = await self.db.execute(select(Setting).where(Setting.key == key))
        return result.scalar_one_or_none()

    async def list_settings(self, category: str | None = None) -> list[Setting]:
        """Settings ordered by category then key; one category when given."""
        stmt = select(Setting)
        if category:
            stmt = stmt.where(Setting.category == category)
        result = await self.db.execute(stmt.order_by(Setting.category, Setting.key))
        return list(result.scalars().all())
