"""Scheduling core: availability resolution and booking writes."""

from interviewbook.scheduling.availability import (
    day_of_week,
    get_booking_calendar,
    get_offered_times,
    get_slots_for_date,
    is_date_selectable,
    resolve_slots,
    rule_slot_times,
)
from interviewbook.scheduling.booking import (
    create_booking,
    get_dashboard_stats,
    update_booking_status,
)

__all__ = [
    "create_booking",
    "day_of_week",
    "get_booking_calendar",
    "get_dashboard_stats",
    "get_offered_times",
    "get_slots_for_date",
    "is_date_selectable",
    "resolve_slots",
    "rule_slot_times",
    "update_booking_status",
]
