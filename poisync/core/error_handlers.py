"""
Error handlers for the FastAPI application.
Every PoiSyncException becomes a StandardErrorResponse with its status code.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from poisync.core.exceptions import ErrorCode, PoiSyncException
from poisync.schemas.base import StandardErrorResponse

logger = logging.getLogger(__name__)


def _error_response(request: Request, error_code: str, message: str,
                    details: dict, status_code: int) -> JSONResponse:
    request_id = getattr(request.state, 'request_id', None)
    error_response = StandardErrorResponse(
        error_code=error_code,
        message=message,
        details=details or None,
        **({"request_id": request_id} if request_id else {}),
    )
    return JSONResponse(status_code=status_code, content=error_response.model_dump(mode="json"))


async def handle_poi_sync_exception(request: Request, exc: PoiSyncException) -> JSONResponse:
    logger.error(
        f"{exc.error_code.value} on {request.method} {request.url.path}: {exc.message}",
        extra={'error_code': exc.error_code.value, 'status_code': exc.status_code},
    )
    return _error_response(request, exc.error_code.value, exc.message, exc.details, exc.status_code)


async def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(
        request, ErrorCode.INTERNAL_SERVER_ERROR.value, "Internal server error", {}, 500
    )


def setup_error_handlers(app):
    """
    Set up error handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(PoiSyncException, handle_poi_sync_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
