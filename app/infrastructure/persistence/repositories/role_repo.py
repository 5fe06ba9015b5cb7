"""Role and permission repositories: role CRUD with permission sets, holder counts."""

from __future__ import annotations

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """Role repository. Roles come back with role_permissions -> permission loaded."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def get_by_name(self, name: str) -> Role | None:
        result = await self.db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def get_by_ids(self, role_ids: list[str]) -> list[Role]:
        """Return the roles matching role_ids (missing ids are silently absent)."""
        if not role_ids:
            return []
        result = await self.db.execute(select(Role).where(Role.id.in_(role_ids)))
        return list(result.scalars().all())

    async def get_with_permissions(self, role_id: str) -> Role | None:
        result = await self.db.execute(
            select(Role)
            .options(
                selectinload(Role.role_permissions).selectinload(RolePermission.permission)
            )
            .where(Role.id == role_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_roles(self, search: str | None = None) -> list[Role]:
        """All roles ordered by name, optionally filtered on name/display name/description."""
        stmt = select(Role).options(
            selectinload(Role.role_permissions).selectinload(RolePermission.permission)
        )
        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(Role.name).like(pattern),
                    func.lower(Role.display_name).like(pattern),
                    func.lower(Role.description).like(pattern),
                )
            )
        result = await self.db.execute(stmt.order_by(Role.name))
        return list(result.scalars().all())

    async def user_counts(self, role_ids: list[str]) -> dict[str, int]:
        """Number of users assigned to each role id (0 for roles nobody holds)."""
        if not role_ids:
            return {}
        result = await self.db.execute(
            select(UserRole.role_id, func.count(UserRole.id))
            .where(UserRole.role_id.in_(role_ids))
            .group_by(UserRole.role_id)
        )
        counts = dict.fromkeys(role_ids, 0)
        counts.update({role_id: int(n) for role_id, n in result.all()})
        return counts

    async def count_holders(self, role_name: str) -> int:
        """Number of active users assigned the role named role_name."""
        result = await self.db.execute(
            select(func.count(UserRole.id))
            .join(Role, UserRole.role_id == Role.id)
            .join(User, UserRole.user_id == User.id)
            .where(Role.name == role_name, User.is_active.is_(True))
        )
        return int(result.scalar_one())

    async def replace_permissions(self, role_id: str, permission_ids: list[str]) -> None:
        """Replace the permission set of role_id with permission_ids."""
        await self.db.execute(
            delete(RolePermission).where(RolePermission.role_id == role_id)
        )
        for permission_id in dict.fromkeys(permission_ids):
            self.db.add(RolePermission(role_id=role_id, permission_id=permission_id))
        await self.db.flush()

    async def delete_role(self, role_id: str) -> None:
        """Delete role and its permission grants. Callers check it has no holders."""
        await self.db.execute(
            delete(RolePermission).where(RolePermission.role_id == role_id)
        )
        await self.db.execute(delete(Role).where(Role.id == role_id))


class PermissionRepository(BaseRepository[Permission]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def list_permissions(self) -> list[Permission]:
        result = await self.db.execute(select(Permission).order_by(Permission.name))
        return list(result.scalars().all())

    async def get_by_ids(self, permission_ids: list[str]) -> list[Permission]:
        if not permission_ids:
            return []
        result = await self.db.execute(
            select(Permission).where(Permission.id.in_(permission_ids))
        )
        return list(result.scalars().all())
