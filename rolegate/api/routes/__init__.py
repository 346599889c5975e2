"""HTTP routes."""

from fastapi import APIRouter

from rolegate.api.routes import admin, auth, health, moderator

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(moderator.router, prefix="/moderator", tags=["moderator"])
