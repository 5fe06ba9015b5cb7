"""Baseline data seeding: roles, permissions, admin grants, admin user, settings.

Every write goes through insert_if_absent, so running the seed again creates
nothing new and leaves rows edited since the previous run untouched.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TypedDict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.setting import Setting
from app.infrastructure.persistence.models.user import User
from app.infrastructure.persistence.upsert import insert_if_absent
from app.infrastructure.security.password import get_password_hash

logger = logging.getLogger(__name__)


class RoleData(TypedDict):
    """Role configuration for default roles."""

    display_name: str
    description: str


class SettingData(TypedDict):
    """Default setting row (value is string-encoded)."""

    key: str
    value: str
    description: str
    category: str


ADMIN_ROLE = "admin"

DEFAULT_ROLES: dict[str, RoleData] = {
    ADMIN_ROLE: {"display_name": "Administrator", "description": "Full system access"},
    "user": {"display_name": "User", "description": "Standard user access"},
}

DEFAULT_PERMISSIONS: list[tuple[str, str]] = [
    ("users.read", "Read users"),
    ("users.write", "Write users"),
    ("users.delete", "Delete users"),
    ("roles.read", "Read roles"),
    ("roles.write", "Write roles"),
    ("settings.read", "Read settings"),
    ("settings.write", "Write settings"),
    ("plugins.read", "Read plugins"),
    ("plugins.write", "Write plugins"),
]

DEFAULT_SETTINGS: list[SettingData] = [
    {
        "key": "app.name",
        "value": "WebCore Dashboard",
        "description": "Application name",
        "category": "general",
    },
    {
        "key": "app.version",
        "value": "2.0.0",
        "description": "Application version",
        "category": "general",
    },
    {
        "key": "security.session_timeout",
        "value": "3600",
        "description": "Session timeout in seconds",
        "category": "security",
    },
    {
        "key": "upload.max_size",
        "value": "10485760",
        "description": "Maximum upload size in bytes",
        "category": "upload",
    },
]

ADMIN_EMAIL = "admin@webcore.com"
# Printed at the end of a seed run; must be rotated right after first login.
ADMIN_DEFAULT_PASSWORD = "admin123"
ADMIN_PASSWORD_HASH_ROUNDS = 12


@dataclass
class SeedResult:
    """What a seed run touched. *_created counts only rows this run inserted."""

    admin_role_id: str
    admin_user_id: str
    roles_created: int = 0
    permissions_created: int = 0
    grants_created: int = 0
    users_created: int = 0
    user_roles_created: int = 0
    settings_created: int = 0

    @property
    def total_created(self) -> int:
        return (
            self.roles_created
            + self.permissions_created
            + self.grants_created
            + self.users_created
            + self.user_roles_created
            + self.settings_created
        )


class SeedService:
    """Brings a migrated database to the baseline state. Caller owns the transaction."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def run(self) -> SeedResult:
        """Run all seed steps in dependency order and return what was created."""
        role_ids, roles_created = await self.seed_roles()
        admin_role_id = role_ids[ADMIN_ROLE]
        permissions_created = await self.seed_permissions()
        grants_created = await self.grant_all_permissions(admin_role_id)
        admin_user, users_created = await self.seed_admin_user()
        user_roles_created = await self.assign_role(admin_user.id, admin_role_id)
        settings_created = await self.seed_settings()

        result = SeedResult(
            admin_role_id=admin_role_id,
            admin_user_id=admin_user.id,
            roles_created=roles_created,
            permissions_created=permissions_created,
            grants_created=grants_created,
            users_created=users_created,
            user_roles_created=user_roles_created,
            settings_created=settings_created,
        )
        logger.info("Seed finished: %d new rows", result.total_created)
        return result

    async def seed_roles(self) -> tuple[dict[str, str], int]:
        """Upsert default roles by name. Returns (role name -> id, created count)."""
        role_ids: dict[str, str] = {}
        created_count = 0
        for name, data in DEFAULT_ROLES.items():
            role, created = await insert_if_absent(
                self.db,
                Role,
                {"name": name},
                {
                    "display_name": data["display_name"],
                    "description": data["description"],
                    "is_active": True,
                },
            )
            role_ids[name] = role.id
            created_count += created
        logger.info("Roles seeded (%d new)", created_count)
        return role_ids, created_count

    async def seed_permissions(self) -> int:
        """Upsert the default permission list by name."""
        created_count = 0
        for name, description in DEFAULT_PERMISSIONS:
            _, created = await insert_if_absent(
                self.db, Permission, {"name": name}, {"description": description}
            )
            created_count += created
        logger.info("Permissions seeded (%d new)", created_count)
        return created_count

    async def grant_all_permissions(self, role_id: str) -> int:
        """Grant every permission currently stored (seeded or not) to role_id."""
        result = await self.db.execute(select(Permission.id))
        created_count = 0
        for permission_id in result.scalars().all():
            _, created = await insert_if_absent(
                self.db,
                RolePermission,
                {"role_id": role_id, "permission_id": permission_id},
            )
            created_count += created
        logger.info("Admin role grants ensured (%d new)", created_count)
        return created_count

    async def seed_admin_user(self) -> tuple[User, int]:
        """Upsert the administrator account by email.

        The default password is hashed on every run (cost 12, off the event
        loop); the hash is only written when the user does not exist yet.
        """
        hashed = await asyncio.to_thread(
            get_password_hash, ADMIN_DEFAULT_PASSWORD, ADMIN_PASSWORD_HASH_ROUNDS
        )
        user, created = await insert_if_absent(
            self.db,
            User,
            {"email": ADMIN_EMAIL},
            {
                "hashed_password": hashed,
                "first_name": "Admin",
                "last_name": "User",
                "is_active": True,
                "is_email_verified": True,
            },
        )
        logger.info("Admin user %s", "created" if created else "already present")
        return user, int(created)

    async def assign_role(self, user_id: str, role_id: str) -> int:
        """Upsert the (user_id, role_id) assignment."""
        _, created = await insert_if_absent(
            self.db, UserRole, {"user_id": user_id, "role_id": role_id}
        )
        return int(created)

    async def seed_settings(self) -> int:
        """Upsert default settings by key."""
        created_count = 0
        for setting in DEFAULT_SETTINGS:
            _, created = await insert_if_absent(
                self.db,
                Setting,
                {"key": setting["key"]},
                {
                    "value": setting["value"],
                    "description": setting["description"],
                    "category": setting["category"],
                },
            )
            created_count += created
        logger.info("Settings seeded (%d new)", created_count)
        return created_count
