"""User repository: lookups with roles loaded, listing, authentication, role assignment."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Literal

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.infrastructure.persistence.models.audit_log import AuditLog
from app.infrastructure.persistence.models.permission import RolePermission, UserRole
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.security.password import get_password_hash, verify_password

SortField = Literal[
    "first_name", "last_name", "email", "username", "created_at", "updated_at"
]
SortOrder = Literal["asc", "desc"]

_SORT_COLUMNS = {
    "first_name": User.first_name,
    "last_name": User.last_name,
    "email": User.email,
    "username": User.username,
    "created_at": User.created_at,
    "updated_at": User.updated_at,
}

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def _with_roles():
    """Loader options: user_roles -> role -> role_permissions -> permission."""
    return (
        selectinload(User.user_roles)
        .selectinload(UserRole.role)
        .selectinload(Role.role_permissions)
        .selectinload(RolePermission.permission),
    )


class UserRepository(BaseRepository[User]):
    """User repository. Returns ORM users with the RBAC chain eagerly loaded."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_with_roles(self, user_id: str) -> User | None:
        """Return user with roles/permissions loaded, refreshing any cached instance."""
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .options(*_with_roles())
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email.lower()).options(*_with_roles())
        )
        return result.scalar_one_or_none()

    async def find_conflict(
        self,
        email: str | None,
        username: str | None,
        exclude_id: str | None = None,
    ) -> Literal["email", "username"] | None:
        """Return which unique field is already used by another user, if any."""
        conditions = []
        if email:
            conditions.append(User.email == email.lower())
        if username:
            conditions.append(User.username == username.lower())
        if not conditions:
            return None
        stmt = select(User.email, User.username).where(or_(*conditions))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        result = await self.db.execute(stmt.limit(1))
        row = result.first()
        if row is None:
            return None
        if email and row.email == email.lower():
            return "email"
        return "username"

    async def list_users(
        self,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        sort_by: SortField = "created_at",
        sort_order: SortOrder = "desc",
    ) -> tuple[list[User], int]:
        """Return (page of users, total matching) with search across name/email/username."""
        criteria = []
        if search:
            pattern = f"%{search.strip()}%"
            criteria.append(
                or_(
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.username.ilike(pattern),
                )
            )
        total = await self.count(*criteria)

        column = _SORT_COLUMNS[sort_by]
        order = column.asc() if sort_order == "asc" else column.desc()
        stmt = (
            select(User)
            .options(*_with_roles())
            .order_by(order, User.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        if criteria:
            stmt = stmt.where(*criteria)
        result = await self.db.execute(stmt)
        return list(result.scalars().all()), total

    async def authenticate(self, email: str, password: str) -> User | None:
        """Return the active user matching email/password, else None."""
        user = await self.get_by_email(email)
        if not user:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not user.is_active:
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return user

    async def replace_roles(self, user_id: str, role_ids: list[str]) -> None:
        """Replace all role assignments of user_id with role_ids."""
        await self.db.execute(delete(UserRole).where(UserRole.user_id == user_id))
        for role_id in dict.fromkeys(role_ids):
            self.db.add(UserRole(user_id=user_id, role_id=role_id))
        await self.db.flush()

    async def delete_user(self, user_id: str) -> None:
        """Delete user, its role assignments, and detach its audit entries."""
        await self.db.execute(delete(UserRole).where(UserRole.user_id == user_id))
        await self.db.execute(
            update(AuditLog.__table__)
            .where(AuditLog.__table__.c.user_id == user_id)
            .values(user_id=None)
        )
        await self.db.execute(delete(User).where(User.id == user_id))

    async def count_created_between(
        self, start: datetime, end: datetime | None = None
    ) -> int:
        """Users created in [start, end) (open-ended when end is None)."""
        criteria = [User.created_at >= start]
        if end is not None:
            criteria.append(User.created_at < end)
        return await self.count(*criteria)

    async def stats(self) -> dict[str, int]:
        """Return total/active/inactive/verified/unverified user counts."""
        result = await self.db.execute(
            select(
                func.count(User.id),
                func.count(User.id).filter(User.is_active.is_(True)),
                func.count(User.id).filter(User.is_email_verified.is_(True)),
            )
        )
        total, active, verified = result.one()
        return {
            "total": total,
            "active": active,
            "inactive": total - active,
            "verified": verified,
            "unverified": total - verified,
        }
