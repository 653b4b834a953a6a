from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.features.site_check.schemas.site_check import SiteCheckIn
from app.features.site_check.services.site_check import SiteCheckService
from app.platform.exceptions import URL_REQUIRED
from app.platform.logger import get_logger
from app.platform.response import error_response

logger = get_logger("site_check_routes")
router = APIRouter(tags=["site-check"])


def get_site_check_service() -> SiteCheckService:
    return SiteCheckService()


@router.post("/check")
async def check_website(
    check_in: SiteCheckIn,
    service: SiteCheckService = Depends(get_site_check_service),
):
    if not check_in.url or not check_in.url.strip():
        return error_response(URL_REQUIRED, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        report = await service.check(check_in.url)
        return JSONResponse(status_code=status.HTTP_200_OK, content=report.to_response())
    except Exception as e:
        logger.error(f"Critical internal error checking {check_in.url}: {e}", exc_info=True)
        return error_response(
            str(e) or "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
