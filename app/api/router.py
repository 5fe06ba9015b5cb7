"""API router aggregation.

Health is mounted at /health; everything else lives under /api.
"""

from fastapi import APIRouter

from app.api.endpoints import auth, dashboard, health, profile, roles, settings, users

health_router = APIRouter()
health_router.include_router(health.router, prefix="/health", tags=["health"])

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
