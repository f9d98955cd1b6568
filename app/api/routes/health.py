"""
Health API Routes
"""
from fastapi import APIRouter, Depends

from app.api.dependencies import get_app_settings
from app.config import Settings

router = APIRouter()


@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)) -> dict:
    """Liveness plus which gateway endpoint requests are routed to."""
    return {
        "status": "healthy",
        "gateway": settings.gateway_environment,
    }
