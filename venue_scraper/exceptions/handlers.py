import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import OutputWriteError, PageProcessingError

logger = logging.getLogger(__name__)


async def page_processing_error_handler(
    _request: Request, exc: PageProcessingError
) -> JSONResponse:
    logger.error("Page processing error: %s", exc.message)
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message},
    )


async def output_write_error_handler(
    _request: Request, exc: OutputWriteError
) -> JSONResponse:
    logger.error("Output write error: %s (path=%s)", exc.message, exc.path)
    return JSONResponse(
        status_code=500,
        content={"detail": exc.message},
    )
