"""API v1 routes."""

from fastapi import APIRouter

from intake.api.v1 import auth, cases, config, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(cases.router, prefix="/cases", tags=["cases"])
router.include_router(config.router, prefix="/config", tags=["config"])
