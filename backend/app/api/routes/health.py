"""
Health check endpoints.
"""

from fastapi import APIRouter

from app.core.config import settings
from app.core.models import AIProvider

router = APIRouter()


@router.get("/api/health")
async def health_check() -> dict:
    """Basic health check."""
    return {"status": "healthy"}


@router.get("/api/ready")
async def readiness_check() -> dict:
    """Readiness check - lists the providers this deployment can route to."""
    return {
        "status": "ready",
        "version": settings.app_version,
        "providers": [p.value for p in AIProvider],
    }
