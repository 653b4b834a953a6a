from fastapi import APIRouter

from app.features.site_check.routes.site_check import router as site_check_router
from app.platform.config import settings

api_router = APIRouter()


# Service info
@api_router.get("", tags=["Info"])
def api_info():
    return {
        "app_name": settings.APP_NAME,
        "description": settings.APP_DESCRIPTION,
        "version": settings.APP_VERSION,
        "docs_url": "/docs",
        "check_endpoint": "/api/check",
    }


# Register all feature routes
api_router.include_router(site_check_router)
