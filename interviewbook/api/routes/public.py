"""Candidate-facing routes: availability, slots, and booking."""

import logging
from datetime import date

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query, Request
from fastapi.responses import Response

from interviewbook.api.limits import limiter
from interviewbook.calendar_export import ICS_FILENAME, ICS_MEDIA_TYPE, booking_to_ics
from interviewbook.config import BOOKING_RATE_LIMIT
from interviewbook.models import (
    Booking,
    BookingCalendar,
    BookingError,
    BookingErrorType,
    CreateBooking,
    SlotListing,
)
from interviewbook.scheduling import create_booking, get_booking_calendar, get_slots_for_date

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])

ERROR_STATUS = {
    BookingErrorType.VALIDATION_ERROR: 422,
    BookingErrorType.CONFLICT: 409,
    BookingErrorType.STORE_UNAVAILABLE: 503,
}


def _notify(notifier, db, booking_id: str) -> None:
    """Background task body. Failures are logged, never raised."""
    try:
        result = notifier(db, booking_id)
    except Exception as e:
        logger.exception(f"❌ Confirmation for {booking_id} crashed: {e}")
        return
    if isinstance(result, dict) and not result.get("success", False):
        logger.warning(f"⚠️ Confirmation for {booking_id} not sent: {result.get('error')}")


@router.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/availability", response_model=BookingCalendar)
def get_availability(request: Request) -> BookingCalendar:
    """Date range, active weekdays and blocked dates for the date picker."""
    today = request.app.state.clock().date()
    return get_booking_calendar(request.app.state.db, today)


@router.get("/slots", response_model=SlotListing)
def list_slots(
    request: Request,
    target_date: date = Query(alias="date"),
    seq: int | None = None,
) -> SlotListing:
    """Resolve slots for a date, echoing seq so clients can drop stale replies."""
    now = request.app.state.clock()
    slots = get_slots_for_date(request.app.state.db, target_date, now)
    return SlotListing(booking_date=target_date, seq=seq, slots=slots)


@router.post("/bookings", response_model=Booking, status_code=201)
@limiter.limit(BOOKING_RATE_LIMIT)
def book_slot(
    request: Request,
    data: CreateBooking,
    background_tasks: BackgroundTasks,
) -> Booking:
    """Book a slot. The confirmation email is sent after the response."""
    db = request.app.state.db
    notifier = request.app.state.notifier

    def dispatch(booking_id: str) -> None:
        background_tasks.add_task(_notify, notifier, db, booking_id)

    result = create_booking(
        db,
        data,
        data.booking_date,
        data.booking_time,
        now=request.app.state.clock(),
        dispatch=dispatch,
    )

    if isinstance(result, BookingError):
        raise HTTPException(status_code=ERROR_STATUS[result.type], detail=result.message)
    return result


@router.get("/bookings/{booking_id}/calendar.ics")
def download_calendar(request: Request, booking_id: str) -> Response:
    """Calendar file for a booking."""
    booking = request.app.state.db.get_booking(booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    return Response(
        content=booking_to_ics(booking),
        media_type=ICS_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{ICS_FILENAME}"'},
    )
