"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import health, identity, profiles

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(identity.router, tags=["identity"])
router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
