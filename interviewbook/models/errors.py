"""Error types for booking and scheduling failures."""

import sqlite3
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class BookingErrorType(str, Enum):
    """Types of errors that can occur when writing a booking."""

    VALIDATION_ERROR = "validation_error"  # Rejected before any write
    CONFLICT = "conflict"  # Slot already held by a non-cancelled booking
    STORE_UNAVAILABLE = "store_unavailable"  # Transient store failure


class BookingError(BaseModel):
    """Structured error information for a failed booking attempt."""

    type: BookingErrorType = Field(description="Category of error")
    message: str = Field(description="Human-readable error message")
    timestamp: datetime = Field(default_factory=datetime.now)
    retryable: bool = Field(default=False, description="Whether the user may retry")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional error context")

    @classmethod
    def from_exception(
        cls,
        e: Exception,
        error_type: BookingErrorType | None = None,
    ) -> "BookingError":
        """Create a BookingError from a store exception.

        Args:
            e: The exception that occurred
            error_type: Optional explicit error type

        Returns:
            BookingError instance
        """
        if error_type is None:
            if isinstance(e, sqlite3.IntegrityError):
                if "UNIQUE" in str(e).upper():
                    error_type = BookingErrorType.CONFLICT
                else:
                    error_type = BookingErrorType.VALIDATION_ERROR
            else:
                error_type = BookingErrorType.STORE_UNAVAILABLE

        if error_type == BookingErrorType.CONFLICT:
            message = "This time slot has just been booked. Please choose another time."
        elif error_type == BookingErrorType.STORE_UNAVAILABLE:
            message = "Booking service is temporarily unavailable. Please try again."
        else:
            message = str(e)

        return cls(
            type=error_type,
            message=message,
            retryable=error_type != BookingErrorType.VALIDATION_ERROR,
            details={"exception_type": type(e).__name__},
        )


class SchedulingError(Exception):
    """Base class for scheduling domain errors."""


class BookingNotFound(SchedulingError):
    """Raised when a booking id does not exist."""

    def __init__(self, booking_id: str):
        super().__init__(f"Booking not found: {booking_id}")
        self.booking_id = booking_id


class InvalidStatusTransition(SchedulingError):
    """Raised when a booking is moved out of a terminal status."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change status from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class EmailConfigurationError(SchedulingError):
    """Raised when the email provider is not configured."""
