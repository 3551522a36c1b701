"""
KnownError -> JSON response.

Routes let KnownError propagate; this handler turns it into a FailureDetail
body with the error's status code.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from pixelfate.models.failure import KnownError

logger = logging.getLogger(__name__)


async def known_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, KnownError):
        raise exc
    logger.info(
        "%s %s -> %d %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.kind.value,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_detail().model_dump(mode="json")},
    )
