from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.platform.logger import get_logger
from app.platform.response import error_response

logger = get_logger("exceptions")

URL_REQUIRED = "URL is required"
INVALID_BODY = "Invalid request body"


def _blames_url(errors) -> bool:
    return any("url" in error.get("loc", ()) for error in errors)


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail) or "Error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.info(f"Rejected request to {request.url.path}: {errors}")
        message = URL_REQUIRED if _blames_url(errors) else INVALID_BODY
        return error_response(message, status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception: {exc}")
        return error_response(
            str(exc) or "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
