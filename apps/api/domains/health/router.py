"""Health check router — liveness + readiness.

Readiness reports which collaborators are configured. It never calls them:
a slow AI gateway must not take the API out of rotation.
"""

import structlog
from fastapi import APIRouter, Depends

from apps.api.core.config import Settings, get_settings

router = APIRouter(tags=["health"])
logger = structlog.get_logger()


@router.get("/health")
async def health_liveness():
    """Liveness probe, 200 while the API process is running."""
    return {"status": "healthy", "service": "api"}


@router.get("/health/ready")
async def health_readiness(settings: Settings = Depends(get_settings)):
    """Readiness probe. Supabase must be configured; AI and e-mail are optional."""
    supabase_ready = bool(settings.SUPABASE_URL and settings.SUPABASE_ANON_KEY)
    services = {
        "api": "up",
        "supabase": "configured" if supabase_ready else "missing",
        "ai_gateway": "configured" if settings.AI_API_KEY else "missing",
        "email": "configured" if settings.RESEND_API_KEY else "missing",
    }
    status = "healthy" if services["supabase"] == "configured" else "degraded"
    if status != "healthy":
        logger.warning("readiness_degraded", services=services)
    return {"status": status, "version": settings.APP_VERSION, "services": services}
