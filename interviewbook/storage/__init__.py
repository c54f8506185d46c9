"""Storage utilities for persistence."""

from interviewbook.storage.database import BookingDB, generate_id

__all__ = [
    "BookingDB",
    "generate_id",
]
