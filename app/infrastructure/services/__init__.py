"""Infrastructure services: baseline data seeding."""

from app.infrastructure.services.seed_service import SeedResult, SeedService

__all__ = [
    "SeedResult",
    "SeedService",
]
