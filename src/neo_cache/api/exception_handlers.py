"""
Exception handlers for the cache HTTP surface.

Maps NeoCacheError subclasses to HTTP status codes and a uniform error body.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import NeoCacheError, LockAcquisitionTimeout, get_http_status_code, create_error_response

logger = logging.getLogger(__name__)


class ExceptionHandlerRegistry:
    """Registers cache engine exception handlers on an application."""

    def __init__(self, is_production: bool = True):
        self.is_production = is_production

    def register_handlers(self, app: FastAPI) -> None:
        """Register exception handlers for the application.

        Args:
            app: FastAPI application instance
        """
        @app.exception_handler(NeoCacheError)
        async def neo_cache_exception_handler(request: Request, exc: NeoCacheError):
            """Handle cache engine exceptions."""
            status_code = get_http_status_code(exc)
            if status_code >= 500:
                logger.error(f"Cache engine error on {request.url.path}: {exc.message}", extra={"error": exc.to_dict()})
            else:
                logger.info(f"Rejected request on {request.url.path}: {exc.message}")

            headers: Optional[dict] = None
            if isinstance(exc, LockAcquisitionTimeout):
                headers = {"Retry-After": "1"}

            return JSONResponse(status_code=status_code, content=create_error_response(exc), headers=headers)

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle unexpected exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)

            message = "An unexpected error occurred" if self.is_production else str(exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": {"code": "InternalError", "message": message, "details": {}, "type": "Exception"}},
            )


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """Register cache engine exception handlers in one call."""
    ExceptionHandlerRegistry(is_production=is_production).register_handlers(app)
