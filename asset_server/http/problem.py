"""Problem+JSON exception handler for errors that escape the asset handler.

Build failures for assets without an in-band diagnostic are re-raised by the
handler and end up here as RFC7807 500 responses.
"""

from __future__ import annotations

import logging
from fastapi import Request
from fastapi.responses import JSONResponse

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return JSONResponse(
        {"title": "Internal Server Error", "status": 500, "detail": type(exc).__name__},
        status_code=500,
        media_type=PROBLEM_MEDIA_TYPE,
    )


__all__ = ["PROBLEM_MEDIA_TYPE", "handle_unexpected_error"]
