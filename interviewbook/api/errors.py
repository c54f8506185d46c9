"""Exception handlers for the API."""

import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


async def store_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
    """Degrade store failures to a visible 503 instead of a crash."""
    logger.error(f"❌ Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"error": "Data unavailable"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(sqlite3.Error, store_error_handler)
