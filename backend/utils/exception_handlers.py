import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from utils.compliance import InvalidMrlLevel

logger = logging.getLogger(__name__)


async def invalid_mrl_level_handler(request: Request, exc: InvalidMrlLevel):
    logger.warning(f"Rejected MRL level on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last-resort handler: storage faults and other unexpected errors become a 500."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
