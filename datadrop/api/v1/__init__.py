"""API v1 routes."""

from fastapi import APIRouter

from datadrop.api.v1 import data, health, stats, upload

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(upload.router, prefix="/upload", tags=["upload"])
router.include_router(data.router, prefix="/data", tags=["data"])
router.include_router(stats.router, prefix="/stats", tags=["stats"])
