"""Booking writer and booking lifecycle operations."""

import logging
import sqlite3
from collections.abc import Callable
from datetime import date, datetime, time, timedelta

from interviewbook.config import BOOKING_WINDOW_DAYS, DEFAULT_BOOKING_DURATION
from interviewbook.models import (
    TERMINAL_STATUSES,
    Booking,
    BookingError,
    BookingErrorType,
    BookingFilter,
    BookingNotFound,
    BookingStatus,
    CandidateInfo,
    DashboardStats,
    InvalidStatusTransition,
)
from interviewbook.scheduling.availability import get_offered_times
from interviewbook.storage import BookingDB

logger = logging.getLogger(__name__)

Dispatch = Callable[[str], object]

UPCOMING_PREVIEW_LIMIT = 5


def create_booking(
    db: BookingDB,
    candidate: CandidateInfo,
    booking_date: date,
    booking_time: time,
    *,
    now: datetime,
    dispatch: Dispatch | None = None,
) -> Booking | BookingError:
    """Validate and persist a booking, then hand its id to dispatch.

    The unique index on (booking_date, booking_time) decides races between
    candidates; a lost race comes back as a conflict error. dispatch runs
    only after a successful write and its failures never reach the caller.

    Args:
        db: Booking store
        candidate: Validated contact details
        booking_date: Chosen date
        booking_time: Chosen slot start
        now: Current wall-clock time
        dispatch: Called once with the new booking id

    Returns:
        The stored Booking, or a BookingError describing why nothing was stored
    """
    if booking_date < now.date():
        return BookingError(
            type=BookingErrorType.VALIDATION_ERROR,
            message="Cannot book a date in the past.",
            details={"booking_date": booking_date.isoformat()},
        )

    if booking_date > now.date() + timedelta(days=BOOKING_WINDOW_DAYS):
        return BookingError(
            type=BookingErrorType.VALIDATION_ERROR,
            message=f"Bookings open at most {BOOKING_WINDOW_DAYS} days ahead.",
            details={"booking_date": booking_date.isoformat()},
        )

    try:
        offered = get_offered_times(db, booking_date, now)
    except sqlite3.Error as e:
        logger.error(f"❌ Could not load availability for {booking_date}: {e}")
        return BookingError.from_exception(e)

    if booking_time not in offered:
        return BookingError(
            type=BookingErrorType.VALIDATION_ERROR,
            message="The selected time is not offered on this date.",
            details={
                "booking_date": booking_date.isoformat(),
                "booking_time": booking_time.strftime("%H:%M"),
            },
        )

    try:
        booking = db.insert_booking(
            candidate, booking_date, booking_time, duration_minutes=DEFAULT_BOOKING_DURATION
        )
    except sqlite3.Error as e:
        error = BookingError.from_exception(e)
        if error.type == BookingErrorType.CONFLICT:
            logger.info(f"⚠️ Slot {booking_date} {booking_time:%H:%M} already booked")
        else:
            logger.error(f"❌ Booking write failed: {e}")
        return error

    logger.info(f"✅ Booked {booking.id} for {booking_date} {booking_time:%H:%M}")

    if dispatch is not None:
        try:
            dispatch(booking.id)
        except Exception as e:
            logger.warning(f"⚠️ Confirmation dispatch failed for {booking.id}: {e}")

    return booking


def update_booking_status(db: BookingDB, booking_id: str, status: BookingStatus) -> Booking:
    """Move a booking to a new status.

    Scheduled bookings may move to any status. Terminal statuses only
    accept themselves again.

    Raises:
        BookingNotFound: Unknown booking id
        InvalidStatusTransition: Attempt to leave a terminal status
    """
    status = BookingStatus(status)
    booking = db.get_booking(booking_id)
    if booking is None:
        raise BookingNotFound(booking_id)

    if booking.status in TERMINAL_STATUSES and status != booking.status:
        raise InvalidStatusTransition(booking.status.value, status.value)

    db.update_booking_status(booking_id, status)
    logger.info(f"🔄 Booking {booking_id}: {booking.status.value} -> {status.value}")
    return db.get_booking(booking_id)  # type: ignore[return-value]


def get_dashboard_stats(db: BookingDB, today: date) -> DashboardStats:
    """Counts and a short upcoming list for the admin dashboard."""
    scheduled_today = db.list_bookings(
        BookingFilter(status=BookingStatus.SCHEDULED, booking_date=today)
    )
    scheduled_week = db.list_bookings(
        BookingFilter(
            status=BookingStatus.SCHEDULED,
            from_date=today,
            to_date=today + timedelta(days=6),
        )
    )
    scheduled_upcoming = db.list_bookings(
        BookingFilter(status=BookingStatus.SCHEDULED, from_date=today)
    )
    upcoming = db.list_bookings(
        BookingFilter(from_date=today, ascending=True, limit=UPCOMING_PREVIEW_LIMIT)
    )

    return DashboardStats(
        today=len(scheduled_today),
        week=len(scheduled_week),
        total_upcoming=len(scheduled_upcoming),
        upcoming=upcoming,
    )
