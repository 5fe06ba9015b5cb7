"""Seed the database with default roles, permissions, admin user and settings.

Usage:
    python -m scripts.seed
Safe to re-run: every row is inserted only when absent. Exit code 0 on
success, 1 on any failure. Tables must already exist (alembic upgrade head).
"""

import asyncio
import logging
import sys

from app.core.config import Settings, get_settings
from app.infrastructure.persistence.database import build_engine, build_session_factory
from app.infrastructure.services.seed_service import (
    ADMIN_DEFAULT_PASSWORD,
    ADMIN_EMAIL,
    SeedService,
)
from app.shared.logging import LOG_FORMAT, setup_logging

logger = logging.getLogger("scripts.seed")


async def seed(settings: Settings) -> int:
    """Run one seed pass in a single transaction; return the process exit code."""
    engine = build_engine(settings)
    try:
        session_factory = build_session_factory(engine)
        async with session_factory() as session:
            async with session.begin():
                result = await SeedService(session).run()
        logger.info(
            "Roles: %d new, permissions: %d new, admin grants: %d new, "
            "users: %d new, user roles: %d new, settings: %d new",
            result.roles_created,
            result.permissions_created,
            result.grants_created,
            result.users_created,
            result.user_roles_created,
            result.settings_created,
        )
        logger.info("Admin login: %s / %s", ADMIN_EMAIL, ADMIN_DEFAULT_PASSWORD)
        logger.warning("Change the default admin password after first login")
        return 0
    except Exception:
        logger.exception("Seeding failed")
        return 1
    finally:
        await engine.dispose()


def main() -> int:
    try:
        settings = get_settings()
    except ValueError:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.exception("Invalid configuration")
        return 1
    setup_logging()
    logger.info("Seeding database")
    return asyncio.run(seed(settings))


if __name__ == "__main__":
    sys.exit(main())
