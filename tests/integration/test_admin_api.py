"""Tests for admin API routes."""

from datetime import time

import pytest

from interviewbook.models import BookingStatus, Role
from tests.conftest import MONDAY, NEXT_MONDAY, TODAY, TOMORROW


@pytest.fixture
def user_headers(db) -> dict[str, str]:
    """Auth headers for a signed-in user without the admin role."""
    user, token = db.create_user("user@example.com")
    db.grant_role(user.id, Role.USER)
    return {"Authorization": f"Bearer {token}"}


class TestAdminAuth:
    """Tests for admin authentication and authorization."""

    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/admin/rules"),
            ("get", "/admin/blocked-dates"),
            ("get", "/admin/bookings"),
            ("get", "/admin/dashboard"),
            ("get", "/admin/settings/meeting-link"),
        ],
    )
    def test_requires_token(self, client, method, path):
        """Admin routes return 401 without a token."""
        response = getattr(client, method)(path)

        assert response.status_code == 401

    def test_invalid_token(self, client):
        """Unknown tokens return 401."""
        response = client.get("/admin/rules", headers={"Authorization": "Bearer wrong"})

        assert response.status_code == 401

    def test_non_admin_forbidden(self, client, user_headers):
        """Users without the admin role get 403."""
        response = client.get("/admin/rules", headers=user_headers)

        assert response.status_code == 403


class TestRuleRoutes:
    """Tests for /admin/rules."""

    def test_create_and_list(self, client, admin, admin_headers):
        """Created rules belong to the admin and are listed."""
        response = client.post(
            "/admin/rules",
            json={"day_of_week": MONDAY, "start_time": "09:00", "end_time": "12:00"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        rule = response.json()
        assert rule["admin_user_id"] == admin[0].id
        assert rule["slot_duration_minutes"] == 30
        listed = client.get("/admin/rules", headers=admin_headers).json()
        assert [r["id"] for r in listed] == [rule["id"]]

    def test_invalid_window(self, client, admin_headers):
        """End before start is a 422."""
        response = client.post(
            "/admin/rules",
            json={"day_of_week": MONDAY, "start_time": "12:00", "end_time": "09:00"},
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_toggle(self, client, monday_rule, admin_headers):
        """PATCH toggles is_active."""
        response = client.patch(
            f"/admin/rules/{monday_rule.id}", json={"is_active": False}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["is_active"] is False

    def test_toggle_missing(self, client, admin_headers):
        """Toggling an unknown rule is a 404."""
        response = client.patch(
            "/admin/rules/rule_missing", json={"is_active": False}, headers=admin_headers
        )

        assert response.status_code == 404

    def test_delete(self, client, db, monday_rule, admin_headers):
        """DELETE removes the rule."""
        response = client.delete(f"/admin/rules/{monday_rule.id}", headers=admin_headers)

        assert response.status_code == 204
        assert db.get_rule(monday_rule.id) is None
        assert (
            client.delete(f"/admin/rules/{monday_rule.id}", headers=admin_headers).status_code
            == 404
        )


class TestBlockedDateRoutes:
    """Tests for /admin/blocked-dates."""

    def test_create_list_delete(self, client, admin_headers):
        """Blocked dates can be added, listed and removed."""
        created = client.post(
            "/admin/blocked-dates",
            json={"blocked_date": NEXT_MONDAY.isoformat(), "reason": "Offsite"},
            headers=admin_headers,
        )

        assert created.status_code == 201
        blocked_id = created.json()["id"]
        listed = client.get("/admin/blocked-dates", headers=admin_headers).json()
        assert [b["blocked_date"] for b in listed] == ["2026-10-26"]

        assert (
            client.delete(f"/admin/blocked-dates/{blocked_id}", headers=admin_headers).status_code
            == 204
        )
        assert client.get("/admin/blocked-dates", headers=admin_headers).json() == []

    def test_reason_too_long(self, client, admin_headers):
        """Reasons over 200 characters are a 422."""
        response = client.post(
            "/admin/blocked-dates",
            json={"blocked_date": NEXT_MONDAY.isoformat(), "reason": "r" * 201},
            headers=admin_headers,
        )

        assert response.status_code == 422


class TestMeetingLinkRoutes:
    """Tests for /admin/settings/meeting-link."""

    def test_unset(self, client, admin_headers):
        """No link configured reads as null."""
        response = client.get("/admin/settings/meeting-link", headers=admin_headers)

        assert response.json() == {"value": None}

    def test_save_and_read(self, client, db, admin_headers):
        """PUT saves the link used by confirmations."""
        response = client.put(
            "/admin/settings/meeting-link",
            json={"value": " https://meet.example.com/abc "},
            headers=admin_headers,
        )

        assert response.json() == {"value": "https://meet.example.com/abc"}
        assert client.get("/admin/settings/meeting-link", headers=admin_headers).json() == {
            "value": "https://meet.example.com/abc"
        }
        assert db.get_setting("default_meeting_link") == "https://meet.example.com/abc"

    def test_clear(self, client, db, admin_headers):
        """Saving an empty value clears the link."""
        client.put(
            "/admin/settings/meeting-link",
            json={"value": "https://meet.example.com/abc"},
            headers=admin_headers,
        )

        response = client.put(
            "/admin/settings/meeting-link", json={"value": ""}, headers=admin_headers
        )

        assert response.json() == {"value": None}
        assert db.get_setting("default_meeting_link") is None


class TestBookingRoutes:
    """Tests for /admin/bookings."""

    @pytest.fixture
    def bookings(self, db, candidate):
        first = db.insert_booking(candidate, TOMORROW, time(9, 0))
        second = db.insert_booking(candidate, NEXT_MONDAY, time(10, 0))
        return first, second

    def test_list_newest_first(self, client, bookings, admin_headers):
        """Bookings are listed newest date first."""
        first, second = bookings

        listed = client.get("/admin/bookings", headers=admin_headers).json()

        assert [b["id"] for b in listed] == [second.id, first.id]

    def test_filter_and_search(self, client, db, bookings, admin_headers):
        """Status and search filters apply together."""
        first, _ = bookings
        db.update_booking_status(first.id, BookingStatus.NO_SHOW)

        listed = client.get(
            "/admin/bookings",
            params={"status": "no-show", "search": "grace"},
            headers=admin_headers,
        ).json()

        assert [b["id"] for b in listed] == [first.id]

    def test_invalid_status_filter(self, client, admin_headers):
        """Unknown status filters are a 422."""
        response = client.get(
            "/admin/bookings", params={"status": "pending"}, headers=admin_headers
        )

        assert response.status_code == 422

    def test_change_status(self, client, bookings, admin_headers):
        """Scheduled bookings can be completed."""
        first, _ = bookings

        response = client.patch(
            f"/admin/bookings/{first.id}/status",
            json={"status": "completed"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "completed"

    def test_change_status_from_terminal(self, client, bookings, admin_headers):
        """Leaving a terminal status is a 409."""
        first, _ = bookings
        client.patch(
            f"/admin/bookings/{first.id}/status",
            json={"status": "cancelled"},
            headers=admin_headers,
        )

        response = client.patch(
            f"/admin/bookings/{first.id}/status",
            json={"status": "scheduled"},
            headers=admin_headers,
        )

        assert response.status_code == 409

    def test_change_status_missing(self, client, admin_headers):
        """Unknown bookings are a 404."""
        response = client.patch(
            "/admin/bookings/bkg_missing/status",
            json={"status": "completed"},
            headers=admin_headers,
        )

        assert response.status_code == 404

    def test_resend_confirmation(self, client, db, bookings, admin_headers, notifier):
        """Resending calls the notifier and returns its result."""
        first, _ = bookings

        response = client.post(f"/admin/bookings/{first.id}/confirmation", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True
        notifier.assert_called_once_with(db, first.id)

    def test_resend_confirmation_failure(self, client, bookings, admin_headers, notifier):
        """Failed sends return 500 with the error."""
        first, _ = bookings
        notifier.return_value = {"success": False, "error": "RESEND_API_KEY is not configured"}

        response = client.post(f"/admin/bookings/{first.id}/confirmation", headers=admin_headers)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "RESEND_API_KEY is not configured",
        }


class TestDashboardRoute:
    """Tests for /admin/dashboard."""

    def test_stats(self, client, db, candidate, admin_headers):
        """Dashboard counts scheduled bookings relative to the app clock."""
        db.insert_booking(candidate, TODAY, time(15, 0))
        db.insert_booking(candidate, TOMORROW, time(9, 0))
        db.insert_booking(candidate, NEXT_MONDAY, time(9, 0))

        data = client.get("/admin/dashboard", headers=admin_headers).json()

        assert data["today"] == 1
        assert data["week"] == 2
        assert data["total_upcoming"] == 3
        assert [b["booking_date"] for b in data["upcoming"]] == [
            "2026-10-19",
            "2026-10-20",
            "2026-10-26",
        ]
