"""Availability resolver.

Turns weekly AvailabilityRule windows into concrete time slots for one
calendar date, marking each slot available or taken. Everything time-based
takes ``now``/``today`` as an argument so callers own the clock.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from interviewbook.config import BOOKING_WINDOW_DAYS
from interviewbook.models import AvailabilityRule, BookingCalendar, RuleFilter, TimeSlot
from interviewbook.storage import BookingDB

logger = logging.getLogger(__name__)


def day_of_week(value: date) -> int:
    """Weekday number with Sunday = 0 ... Saturday = 6."""
    return (value.weekday() + 1) % 7


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def rule_slot_times(rule: AvailabilityRule) -> list[time]:
    """Slot start times produced by one rule.

    Steps from start_time by slot_duration_minutes while the whole slot
    still fits before end_time. A trailing partial period is dropped.
    """
    start = _minutes(rule.start_time)
    end = _minutes(rule.end_time)
    duration = rule.slot_duration_minutes

    times = []
    current = start
    while current + duration <= end:
        times.append(time(current // 60, current % 60))
        current += duration
    return times


def resolve_slots(
    target_date: date,
    now: datetime,
    rules: Iterable[AvailabilityRule],
    blocked_dates: Iterable[date],
    booked_times: Iterable[time],
) -> list[TimeSlot]:
    """Compute the ordered slot menu for a date.

    Args:
        target_date: Naive local calendar date being resolved
        now: Current wall-clock time, used to hide past slots today
        rules: Candidate rules; inactive rules and other weekdays are ignored
        blocked_dates: Dates removed from availability
        booked_times: Times held by non-cancelled bookings on target_date

    Returns:
        Slots sorted by time of day. Empty for past or blocked dates and
        weekdays without an active rule. Overlapping rules each emit their
        own slots.
    """
    today = now.date()
    if target_date < today:
        return []

    if target_date in set(blocked_dates):
        return []

    weekday = day_of_week(target_date)
    matching = [r for r in rules if r.is_active and r.day_of_week == weekday]
    if not matching:
        return []

    taken = set(booked_times)
    is_today = target_date == today
    current_time = now.time()

    generated: list[time] = []
    for rule in matching:
        generated.extend(rule_slot_times(rule))
    generated.sort()

    return [
        TimeSlot(
            time_of_day=slot_time,
            available=slot_time not in taken and not (is_today and slot_time <= current_time),
        )
        for slot_time in generated
    ]


def get_slots_for_date(db: BookingDB, target_date: date, now: datetime) -> list[TimeSlot]:
    """Read rules, blocks and bookings for a date and resolve its slots."""
    if target_date < now.date():
        return []

    if db.is_date_blocked(target_date):
        logger.debug(f"📅 {target_date} is blocked")
        return []

    rules = db.list_rules(RuleFilter(day_of_week=day_of_week(target_date), is_active=True))
    if not rules:
        return []

    booked = db.booked_times(target_date)
    return resolve_slots(target_date, now, rules, (), booked)


def get_offered_times(db: BookingDB, target_date: date, now: datetime) -> list[time]:
    """Slot times a candidate could pick, ignoring whether they are taken."""
    if target_date < now.date() or db.is_date_blocked(target_date):
        return []

    rules = db.list_rules(RuleFilter(day_of_week=day_of_week(target_date), is_active=True))
    slots = resolve_slots(target_date, now, rules, (), ())
    return [slot.time_of_day for slot in slots if slot.available]


def is_date_selectable(
    target_date: date,
    today: date,
    weekdays: Iterable[int],
    blocked_dates: Iterable[date],
    window_days: int = BOOKING_WINDOW_DAYS,
) -> bool:
    """Whether the date picker should allow a date."""
    if target_date < today or target_date > today + timedelta(days=window_days):
        return False
    if day_of_week(target_date) not in set(weekdays):
        return False
    return target_date not in set(blocked_dates)


def get_booking_calendar(
    db: BookingDB,
    today: date,
    window_days: int = BOOKING_WINDOW_DAYS,
) -> BookingCalendar:
    """Selectable range, active weekdays and upcoming blocks for the picker."""
    rules = db.list_rules(RuleFilter(is_active=True))
    blocked = db.list_blocked_dates(from_date=today)

    return BookingCalendar(
        from_date=today,
        to_date=today + timedelta(days=window_days),
        available_days=sorted({rule.day_of_week for rule in rules}),
        blocked_dates=[b.blocked_date for b in blocked],
    )
