"""Shared test fixtures for interviewbook tests."""

from collections.abc import Generator
from datetime import date, datetime, time
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from interviewbook.api import create_app
from interviewbook.api.limits import limiter
from interviewbook.models import AvailabilityRule, CandidateInfo, Role, User
from interviewbook.storage import BookingDB

# Monday 2026-10-19, 10:31 local time
NOW = datetime(2026, 10, 19, 10, 31)
TODAY = NOW.date()
TOMORROW = date(2026, 10, 20)
NEXT_MONDAY = date(2026, 10, 26)
YESTERDAY = date(2026, 10, 18)

MONDAY = 1
TUESDAY = 2


@pytest.fixture
def db() -> Generator[BookingDB, None, None]:
    """Create in-memory database for testing."""
    database = BookingDB(":memory:")
    database.init_schema()
    yield database
    database.close()


@pytest.fixture
def admin(db: BookingDB) -> tuple[User, str]:
    """Admin user and its bearer token."""
    user, token = db.create_user("admin@example.com", "Ada Admin")
    db.grant_role(user.id, Role.ADMIN)
    return user, token


@pytest.fixture
def admin_headers(admin: tuple[User, str]) -> dict[str, str]:
    """Valid admin auth headers."""
    return {"Authorization": f"Bearer {admin[1]}"}


@pytest.fixture
def monday_rule(db: BookingDB, admin: tuple[User, str]) -> AvailabilityRule:
    """Mondays 09:00-17:00 in 30 minute slots."""
    return db.create_rule(admin[0].id, MONDAY, time(9, 0), time(17, 0), 30)


@pytest.fixture
def tuesday_rule(db: BookingDB, admin: tuple[User, str]) -> AvailabilityRule:
    """Tuesdays 09:00-12:00 in 60 minute slots."""
    return db.create_rule(admin[0].id, TUESDAY, time(9, 0), time(12, 0), 60)


@pytest.fixture
def candidate() -> CandidateInfo:
    """Sample candidate contact details."""
    return CandidateInfo(
        candidate_name="Grace Hopper",
        candidate_email="grace@example.com",
        candidate_phone="+1 555 0100",
        role_applied="Backend Engineer",
        notes="Prefers video calls",
    )


@pytest.fixture
def booking_payload() -> dict:
    """JSON body for POST /bookings on tomorrow 10:00."""
    return {
        "candidate_name": "Grace Hopper",
        "candidate_email": "grace@example.com",
        "candidate_phone": "+1 555 0100",
        "role_applied": "Backend Engineer",
        "notes": "",
        "booking_date": TOMORROW.isoformat(),
        "booking_time": "10:00",
    }


@pytest.fixture
def mock_resend():
    """Mock Resend email API."""
    with patch("interviewbook.notifications.email.resend.Emails.send") as mock:
        mock.return_value = {"id": "test-email-id"}
        yield mock


@pytest.fixture
def notifier() -> MagicMock:
    """Stand-in for the confirmation email sender."""
    return MagicMock(return_value={"success": True, "meeting_link": None})


@pytest.fixture
def client(db: BookingDB, notifier: MagicMock) -> TestClient:
    """Test client with injected db, notifier and clock. Rate limiting off."""
    limiter.reset()
    app = create_app(db=db, notifier=notifier, clock=lambda: NOW, rate_limit_enabled=False)
    return TestClient(app)
