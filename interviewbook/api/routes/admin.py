"""Admin routes: availability rules, blocked dates, settings, and bookings.

Every route requires a bearer token belonging to a user with the admin role.
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from interviewbook.api.auth import AdminUser
from interviewbook.config import MEETING_LINK_SETTING
from interviewbook.models import (
    AvailabilityRule,
    BlockedDate,
    Booking,
    BookingFilter,
    BookingNotFound,
    BookingStatus,
    CreateBlockedDate,
    CreateRule,
    DashboardStats,
    InvalidStatusTransition,
    MeetingLink,
    UpdateRule,
    UpdateStatus,
)
from interviewbook.scheduling import get_dashboard_stats, update_booking_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# --- Availability Rule Routes ---


@router.get("/rules", response_model=list[AvailabilityRule])
def list_rules(request: Request, admin: AdminUser) -> list[AvailabilityRule]:
    """List all rules by weekday and start time."""
    return request.app.state.db.list_rules()


@router.post("/rules", response_model=AvailabilityRule, status_code=201)
def create_rule(request: Request, admin: AdminUser, data: CreateRule) -> AvailabilityRule:
    """Add a weekly availability window."""
    rule = request.app.state.db.create_rule(
        admin_user_id=admin.id,
        day_of_week=data.day_of_week,
        start_time=data.start_time,
        end_time=data.end_time,
        slot_duration_minutes=data.slot_duration_minutes,
    )
    logger.info(f"➕ Rule {rule.id}: {rule.day_name} {rule.start_time}-{rule.end_time}")
    return rule


@router.patch("/rules/{rule_id}", response_model=AvailabilityRule)
def toggle_rule(
    request: Request, admin: AdminUser, rule_id: str, data: UpdateRule
) -> AvailabilityRule:
    """Activate or deactivate a rule."""
    db = request.app.state.db
    if not db.set_rule_active(rule_id, data.is_active):
        raise HTTPException(status_code=404, detail="Rule not found")
    return db.get_rule(rule_id)


@router.delete("/rules/{rule_id}", status_code=204)
def delete_rule(request: Request, admin: AdminUser, rule_id: str) -> None:
    """Delete a rule."""
    if not request.app.state.db.delete_rule(rule_id):
        raise HTTPException(status_code=404, detail="Rule not found")


# --- Blocked Date Routes ---


@router.get("/blocked-dates", response_model=list[BlockedDate])
def list_blocked_dates(request: Request, admin: AdminUser) -> list[BlockedDate]:
    """List all blocked dates."""
    return request.app.state.db.list_blocked_dates()


@router.post("/blocked-dates", response_model=BlockedDate, status_code=201)
def block_date(request: Request, admin: AdminUser, data: CreateBlockedDate) -> BlockedDate:
    """Block a whole day."""
    blocked = request.app.state.db.create_blocked_date(
        admin_user_id=admin.id,
        blocked_date=data.blocked_date,
        reason=data.reason,
    )
    logger.info(f"🚫 Blocked {blocked.blocked_date}")
    return blocked


@router.delete("/blocked-dates/{blocked_id}", status_code=204)
def unblock_date(request: Request, admin: AdminUser, blocked_id: str) -> None:
    """Remove a blocked date."""
    if not request.app.state.db.delete_blocked_date(blocked_id):
        raise HTTPException(status_code=404, detail="Blocked date not found")


# --- Settings Routes ---


@router.get("/settings/meeting-link", response_model=MeetingLink)
def get_meeting_link(request: Request, admin: AdminUser) -> MeetingLink:
    """The calling admin's default meeting link."""
    setting = request.app.state.db.get_admin_setting(admin.id, MEETING_LINK_SETTING)
    if setting is None:
        return MeetingLink(value=None)
    return MeetingLink(value=setting.setting_value or None)


@router.put("/settings/meeting-link", response_model=MeetingLink)
def save_meeting_link(request: Request, admin: AdminUser, data: MeetingLink) -> MeetingLink:
    """Save the default meeting link. An empty value clears it."""
    setting = request.app.state.db.upsert_setting(
        admin.id, MEETING_LINK_SETTING, data.value or ""
    )
    return MeetingLink(value=setting.setting_value or None)


# --- Booking Routes ---


@router.get("/bookings", response_model=list[Booking])
def list_bookings(
    request: Request,
    admin: AdminUser,
    status: BookingStatus | None = None,
    search: str | None = None,
) -> list[Booking]:
    """List bookings, newest date first, with optional status and search filters."""
    return request.app.state.db.list_bookings(BookingFilter(status=status, search=search))


@router.patch("/bookings/{booking_id}/status", response_model=Booking)
def change_status(
    request: Request, admin: AdminUser, booking_id: str, data: UpdateStatus
) -> Booking:
    """Move a booking to completed, cancelled or no-show."""
    try:
        return update_booking_status(request.app.state.db, booking_id, data.status)
    except BookingNotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e)) from e


@router.post("/bookings/{booking_id}/confirmation")
def resend_confirmation(request: Request, admin: AdminUser, booking_id: str) -> JSONResponse:
    """Send the confirmation email again."""
    result = request.app.state.notifier(request.app.state.db, booking_id)
    return JSONResponse(status_code=200 if result.get("success") else 500, content=result)


# --- Dashboard ---


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(request: Request, admin: AdminUser) -> DashboardStats:
    """Booking counts and the next few bookings."""
    today = request.app.state.clock().date()
    return get_dashboard_stats(request.app.state.db, today)
