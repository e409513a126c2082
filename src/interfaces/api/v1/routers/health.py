"""
Health check endpoint for API monitoring.

Load balancers and monitoring systems use this to verify API availability.
It does not touch the database or the cache.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.shared.config.settings import get_settings

router = APIRouter()


@router.get("/health", response_class=JSONResponse)
async def health_check() -> dict[str, str]:
    """
    Check the health status of the API.

    Returns:
        dict: Health status together with the service name and version
    """
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }
