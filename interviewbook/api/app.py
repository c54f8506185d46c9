"""FastAPI application factory for the interview booking API."""

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from interviewbook import __version__
from interviewbook.api.errors import register_exception_handlers
from interviewbook.api.limits import limiter
from interviewbook.api.routes import admin_router, public_router
from interviewbook.config import CORS_ORIGINS, DATABASE_PATH, RATE_LIMIT_ENABLED
from interviewbook.notifications import dispatch_confirmation
from interviewbook.storage import BookingDB

logger = logging.getLogger(__name__)

Notifier = Callable[[BookingDB, str], dict]


def create_app(
    db: BookingDB | None = None,
    db_path: str | None = None,
    notifier: Notifier | None = None,
    clock: Callable[[], datetime] | None = None,
    rate_limit_enabled: bool | None = None,
) -> FastAPI:
    """Create FastAPI app with optional dependency injection.

    Args:
        db: Database instance. If None, opens db_path and closes it on shutdown.
        db_path: SQLite path used when db is None. Defaults to DATABASE_PATH.
        notifier: Called as notifier(db, booking_id) to send confirmations.
            Defaults to dispatch_confirmation.
        clock: Returns the current local time. Defaults to datetime.now.
        rate_limit_enabled: Overrides RATE_LIMIT_ENABLED when given.

    Returns:
        Configured FastAPI application.
    """
    owns_db = db is None
    if db is None:
        db = BookingDB(db_path or DATABASE_PATH)
        db.init_schema()
        logger.info(f"✅ Database initialized: {db.db_path}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_db:
            db.close()
            logger.info("✅ Database closed")

    app = FastAPI(
        title="InterviewBook API",
        description="Interview slot availability and booking",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.db = db
    app.state.notifier = notifier or dispatch_confirmation
    app.state.clock = clock or datetime.now
    app.state.limiter = limiter
    limiter.enabled = RATE_LIMIT_ENABLED if rate_limit_enabled is None else rate_limit_enabled

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(CORS_ORIGINS),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(public_router)
    app.include_router(admin_router)

    return app
