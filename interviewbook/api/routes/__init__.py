"""API route modules."""

from interviewbook.api.routes.admin import router as admin_router
from interviewbook.api.routes.public import router as public_router

__all__ = ["admin_router", "public_router"]
