"""SQLite database layer for interview bookings.

Provides CRUD operations for AvailabilityRule, BlockedDate, Booking,
AdminSetting, and the users/roles backing admin authentication.
"""

import secrets
import sqlite3
import threading
import uuid
from datetime import date, datetime, time
from pathlib import Path

from interviewbook.config import DATABASE_PATH, DEFAULT_BOOKING_DURATION
from interviewbook.models import (
    AdminSetting,
    AvailabilityRule,
    BlockedDate,
    Booking,
    BookingFilter,
    BookingStatus,
    CandidateInfo,
    Role,
    RuleFilter,
    User,
)

SCHEMA = """
    -- Weekly availability windows
    CREATE TABLE IF NOT EXISTS availability_rules (
        id TEXT PRIMARY KEY,
        admin_user_id TEXT NOT NULL,
        day_of_week INTEGER NOT NULL CHECK(day_of_week BETWEEN 0 AND 6),
        start_time TEXT NOT NULL,
        end_time TEXT NOT NULL,
        slot_duration_minutes INTEGER NOT NULL DEFAULT 30
            CHECK(slot_duration_minutes > 0),
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL,
        CHECK(start_time < end_time)
    );
    CREATE INDEX IF NOT EXISTS idx_rules_day
        ON availability_rules(day_of_week, start_time);

    -- Whole-day blocks
    CREATE TABLE IF NOT EXISTS blocked_dates (
        id TEXT PRIMARY KEY,
        admin_user_id TEXT NOT NULL,
        blocked_date TEXT NOT NULL,
        reason TEXT,
        created_at TEXT NOT NULL
    );
    CREATE INDEX IF NOT EXISTS idx_blocked_dates_date
        ON blocked_dates(blocked_date);

    -- Bookings
    CREATE TABLE IF NOT EXISTS bookings (
        id TEXT PRIMARY KEY,
        candidate_name TEXT NOT NULL,
        candidate_email TEXT NOT NULL,
        candidate_phone TEXT,
        role_applied TEXT NOT NULL,
        notes TEXT,
        booking_date TEXT NOT NULL,
        booking_time TEXT NOT NULL,
        duration_minutes INTEGER NOT NULL DEFAULT 30,
        status TEXT NOT NULL DEFAULT 'scheduled'
            CHECK(status IN ('scheduled', 'completed', 'cancelled', 'no-show')),
        meeting_link TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    );
    -- One live booking per (date, time); cancelled rows free the slot
    CREATE UNIQUE INDEX IF NOT EXISTS ux_bookings_active_slot
        ON bookings(booking_date, booking_time)
        WHERE status != 'cancelled';

    -- Admin settings (one row per admin and key)
    CREATE TABLE IF NOT EXISTS admin_settings (
        id TEXT PRIMARY KEY,
        admin_user_id TEXT NOT NULL,
        setting_key TEXT NOT NULL,
        setting_value TEXT NOT NULL DEFAULT '',
        updated_at TEXT NOT NULL,
        UNIQUE(admin_user_id, setting_key)
    );

    -- Users and roles
    CREATE TABLE IF NOT EXISTS users (
        id TEXT PRIMARY KEY,
        email TEXT NOT NULL UNIQUE,
        full_name TEXT,
        api_token TEXT NOT NULL UNIQUE,
        created_at TEXT NOT NULL
    );
    CREATE TABLE IF NOT EXISTS user_roles (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        role TEXT NOT NULL CHECK(role IN ('admin', 'user')),
        UNIQUE(user_id, role)
    );
"""


def generate_id(prefix: str) -> str:
    """Generate a prefixed UUID."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _format_time(value: time) -> str:
    return value.strftime("%H:%M:%S")


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BookingDB:
    """SQLite database for interview booking resources."""

    def __init__(self, db_path: str | Path | None = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite file, or ":memory:" for in-memory.
                     Defaults to INTERVIEWBOOK_DB_PATH env var or outputs/interviewbook.db
        """
        self.db_path = str(db_path or DATABASE_PATH)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")
        self._lock = threading.RLock()

    def init_schema(self) -> None:
        """Create tables if they don't exist."""
        with self._lock:
            self.conn.executescript(SCHEMA)
            self.conn.commit()

    def close(self) -> None:
        """Close database connection."""
        self.conn.close()

    def _write(self, query: str, params: tuple | list = ()) -> sqlite3.Cursor:
        """Run a single-statement write and commit it, rolling back on failure."""
        with self._lock:
            try:
                cursor = self.conn.execute(query, params)
                self.conn.commit()
            except sqlite3.Error:
                self.conn.rollback()
                raise
            return cursor

    def _fetchone(self, query: str, params: tuple | list = ()) -> sqlite3.Row | None:
        with self._lock:
            return self.conn.execute(query, params).fetchone()

    def _fetchall(self, query: str, params: tuple | list = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self.conn.execute(query, params).fetchall()

    # =========================================================================
    # Availability rule operations
    # =========================================================================

    @staticmethod
    def _row_to_rule(row: sqlite3.Row) -> AvailabilityRule:
        return AvailabilityRule(
            id=row["id"],
            admin_user_id=row["admin_user_id"],
            day_of_week=row["day_of_week"],
            start_time=time.fromisoformat(row["start_time"]),
            end_time=time.fromisoformat(row["end_time"]),
            slot_duration_minutes=row["slot_duration_minutes"],
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def create_rule(
        self,
        admin_user_id: str,
        day_of_week: int,
        start_time: time,
        end_time: time,
        slot_duration_minutes: int = 30,
        is_active: bool = True,
    ) -> AvailabilityRule:
        """Create a new weekly availability rule."""
        rule_id = generate_id("rule")
        now = datetime.now().isoformat()

        self._write(
            """INSERT INTO availability_rules
               (id, admin_user_id, day_of_week, start_time, end_time,
                slot_duration_minutes, is_active, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                rule_id,
                admin_user_id,
                day_of_week,
                _format_time(start_time),
                _format_time(end_time),
                slot_duration_minutes,
                int(is_active),
                now,
            ),
        )

        return AvailabilityRule(
            id=rule_id,
            admin_user_id=admin_user_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            slot_duration_minutes=slot_duration_minutes,
            is_active=is_active,
            created_at=datetime.fromisoformat(now),
        )

    def get_rule(self, rule_id: str) -> AvailabilityRule | None:
        """Get rule by ID."""
        row = self._fetchone("SELECT * FROM availability_rules WHERE id = ?", (rule_id,))
        if row is None:
            return None
        return self._row_to_rule(row)

    def list_rules(self, rule_filter: RuleFilter | None = None) -> list[AvailabilityRule]:
        """List rules ordered by weekday and start time."""
        rule_filter = rule_filter or RuleFilter()
        query = "SELECT * FROM availability_rules WHERE 1=1"
        params: list = []

        if rule_filter.day_of_week is not None:
            query += " AND day_of_week = ?"
            params.append(rule_filter.day_of_week)

        if rule_filter.is_active is not None:
            query += " AND is_active = ?"
            params.append(int(rule_filter.is_active))

        query += " ORDER BY day_of_week, start_time"
        return [self._row_to_rule(row) for row in self._fetchall(query, params)]

    def set_rule_active(self, rule_id: str, is_active: bool) -> bool:
        """Toggle a rule. Returns True if the rule exists."""
        cursor = self._write(
            "UPDATE availability_rules SET is_active = ? WHERE id = ?",
            (int(is_active), rule_id),
        )
        return cursor.rowcount > 0

    def delete_rule(self, rule_id: str) -> bool:
        """Delete rule by ID. Returns True if deleted."""
        cursor = self._write("DELETE FROM availability_rules WHERE id = ?", (rule_id,))
        return cursor.rowcount > 0

    # =========================================================================
    # Blocked date operations
    # =========================================================================

    @staticmethod
    def _row_to_blocked_date(row: sqlite3.Row) -> BlockedDate:
        return BlockedDate(
            id=row["id"],
            admin_user_id=row["admin_user_id"],
            blocked_date=date.fromisoformat(row["blocked_date"]),
            reason=row["reason"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def create_blocked_date(
        self,
        admin_user_id: str,
        blocked_date: date,
        reason: str | None = None,
    ) -> BlockedDate:
        """Block a whole day."""
        blocked_id = generate_id("blk")
        now = datetime.now().isoformat()

        self._write(
            """INSERT INTO blocked_dates (id, admin_user_id, blocked_date, reason, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (blocked_id, admin_user_id, blocked_date.isoformat(), reason, now),
        )

        return BlockedDate(
            id=blocked_id,
            admin_user_id=admin_user_id,
            blocked_date=blocked_date,
            reason=reason,
            created_at=datetime.fromisoformat(now),
        )

    def list_blocked_dates(self, from_date: date | None = None) -> list[BlockedDate]:
        """List blocked dates, optionally only those on or after from_date."""
        query = "SELECT * FROM blocked_dates"
        params: list = []

        if from_date is not None:
            query += " WHERE blocked_date >= ?"
            params.append(from_date.isoformat())

        query += " ORDER BY blocked_date"
        return [self._row_to_blocked_date(row) for row in self._fetchall(query, params)]

    def is_date_blocked(self, target_date: date) -> bool:
        """Check whether any block exists for the date."""
        row = self._fetchone(
            "SELECT 1 FROM blocked_dates WHERE blocked_date = ? LIMIT 1",
            (target_date.isoformat(),),
        )
        return row is not None

    def delete_blocked_date(self, blocked_id: str) -> bool:
        """Remove a block. Returns True if deleted."""
        cursor = self._write("DELETE FROM blocked_dates WHERE id = ?", (blocked_id,))
        return cursor.rowcount > 0

    # =========================================================================
    # Booking operations
    # =========================================================================

    @staticmethod
    def _row_to_booking(row: sqlite3.Row) -> Booking:
        return Booking(
            id=row["id"],
            candidate_name=row["candidate_name"],
            candidate_email=row["candidate_email"],
            candidate_phone=row["candidate_phone"],
            role_applied=row["role_applied"],
            notes=row["notes"],
            booking_date=date.fromisoformat(row["booking_date"]),
            booking_time=time.fromisoformat(row["booking_time"]),
            duration_minutes=row["duration_minutes"],
            status=row["status"],
            meeting_link=row["meeting_link"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def insert_booking(
        self,
        candidate: CandidateInfo,
        booking_date: date,
        booking_time: time,
        duration_minutes: int = DEFAULT_BOOKING_DURATION,
    ) -> Booking:
        """Insert a scheduled booking.

        Raises:
            sqlite3.IntegrityError: If a non-cancelled booking already holds
                the same (date, time).
        """
        booking_id = generate_id("bkg")
        now = datetime.now().isoformat()

        self._write(
            """INSERT INTO bookings
               (id, candidate_name, candidate_email, candidate_phone, role_applied,
                notes, booking_date, booking_time, duration_minutes, status,
                meeting_link, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, 'scheduled', NULL, ?, ?)""",
            (
                booking_id,
                candidate.candidate_name,
                str(candidate.candidate_email),
                candidate.candidate_phone,
                candidate.role_applied,
                candidate.notes,
                booking_date.isoformat(),
                _format_time(booking_time),
                duration_minutes,
                now,
                now,
            ),
        )

        return Booking(
            id=booking_id,
            candidate_name=candidate.candidate_name,
            candidate_email=str(candidate.candidate_email),
            candidate_phone=candidate.candidate_phone,
            role_applied=candidate.role_applied,
            notes=candidate.notes,
            booking_date=booking_date,
            booking_time=booking_time.replace(microsecond=0),
            duration_minutes=duration_minutes,
            status=BookingStatus.SCHEDULED,
            meeting_link=None,
            created_at=datetime.fromisoformat(now),
            updated_at=datetime.fromisoformat(now),
        )

    def get_booking(self, booking_id: str) -> Booking | None:
        """Get booking by ID."""
        row = self._fetchone("SELECT * FROM bookings WHERE id = ?", (booking_id,))
        if row is None:
            return None
        return self._row_to_booking(row)

    def list_bookings(self, booking_filter: BookingFilter | None = None) -> list[Booking]:
        """List bookings matching the filter, ordered by date and time."""
        booking_filter = booking_filter or BookingFilter()
        query = "SELECT * FROM bookings WHERE 1=1"
        params: list = []

        if booking_filter.status is not None:
            query += " AND status = ?"
            params.append(booking_filter.status.value)

        if booking_filter.booking_date is not None:
            query += " AND booking_date = ?"
            params.append(booking_filter.booking_date.isoformat())

        if booking_filter.from_date is not None:
            query += " AND booking_date >= ?"
            params.append(booking_filter.from_date.isoformat())

        if booking_filter.to_date is not None:
            query += " AND booking_date <= ?"
            params.append(booking_filter.to_date.isoformat())

        if booking_filter.search:
            pattern = f"%{_escape_like(booking_filter.search.strip().lower())}%"
            query += (
                " AND (LOWER(candidate_name) LIKE ? ESCAPE '\\'"
                " OR LOWER(candidate_email) LIKE ? ESCAPE '\\'"
                " OR LOWER(role_applied) LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern, pattern])

        direction = "ASC" if booking_filter.ascending else "DESC"
        query += f" ORDER BY booking_date {direction}, booking_time {direction}"

        if booking_filter.limit is not None:
            query += " LIMIT ?"
            params.append(booking_filter.limit)

        return [self._row_to_booking(row) for row in self._fetchall(query, params)]

    def booked_times(self, booking_date: date) -> set[time]:
        """Times already held on a date by non-cancelled bookings."""
        rows = self._fetchall(
            "SELECT booking_time FROM bookings WHERE booking_date = ? AND status != 'cancelled'",
            (booking_date.isoformat(),),
        )
        return {time.fromisoformat(row["booking_time"]) for row in rows}

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> bool:
        """Set a booking's status. Returns True if the booking exists."""
        cursor = self._write(
            "UPDATE bookings SET status = ?, updated_at = ? WHERE id = ?",
            (BookingStatus(status).value, datetime.now().isoformat(), booking_id),
        )
        return cursor.rowcount > 0

    def set_meeting_link(self, booking_id: str, meeting_link: str) -> bool:
        """Attach a meeting link to a booking."""
        cursor = self._write(
            "UPDATE bookings SET meeting_link = ?, updated_at = ? WHERE id = ?",
            (meeting_link, datetime.now().isoformat(), booking_id),
        )
        return cursor.rowcount > 0

    # =========================================================================
    # Admin setting operations
    # =========================================================================

    def upsert_setting(self, admin_user_id: str, key: str, value: str) -> AdminSetting:
        """Insert or replace the admin's value for a key."""
        now = datetime.now().isoformat()
        self._write(
            """INSERT INTO admin_settings (id, admin_user_id, setting_key, setting_value, updated_at)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT(admin_user_id, setting_key)
               DO UPDATE SET setting_value = excluded.setting_value,
                             updated_at = excluded.updated_at""",
            (generate_id("set"), admin_user_id, key, value, now),
        )
        return self.get_admin_setting(admin_user_id, key)  # type: ignore[return-value]

    def get_admin_setting(self, admin_user_id: str, key: str) -> AdminSetting | None:
        """Get one admin's setting row."""
        row = self._fetchone(
            "SELECT * FROM admin_settings WHERE admin_user_id = ? AND setting_key = ?",
            (admin_user_id, key),
        )
        if row is None:
            return None
        return AdminSetting(
            id=row["id"],
            admin_user_id=row["admin_user_id"],
            setting_key=row["setting_key"],
            setting_value=row["setting_value"],
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def get_setting(self, key: str) -> str | None:
        """Most recently updated non-empty value for a key across admins."""
        row = self._fetchone(
            """SELECT setting_value FROM admin_settings
               WHERE setting_key = ? AND setting_value != ''
               ORDER BY updated_at DESC LIMIT 1""",
            (key,),
        )
        return row["setting_value"] if row else None

    # =========================================================================
    # User and role operations
    # =========================================================================

    def create_user(self, email: str, full_name: str | None = None) -> tuple[User, str]:
        """Create a user and return it with its bearer token."""
        user_id = generate_id("usr")
        token = secrets.token_urlsafe(32)
        now = datetime.now().isoformat()

        self._write(
            """INSERT INTO users (id, email, full_name, api_token, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (user_id, email, full_name, token, now),
        )

        user = User(
            id=user_id,
            email=email,
            full_name=full_name,
            created_at=datetime.fromisoformat(now),
        )
        return user, token

    def get_user_by_token(self, token: str) -> User | None:
        """Resolve a bearer token to a user."""
        row = self._fetchone("SELECT * FROM users WHERE api_token = ?", (token,))
        if row is None:
            return None
        return User(
            id=row["id"],
            email=row["email"],
            full_name=row["full_name"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def grant_role(self, user_id: str, role: Role) -> None:
        """Grant a role (no-op if already granted)."""
        self._write(
            "INSERT OR IGNORE INTO user_roles (id, user_id, role) VALUES (?, ?, ?)",
            (generate_id("role"), user_id, Role(role).value),
        )

    def has_role(self, user_id: str, role: Role) -> bool:
        """Check whether the user holds a role."""
        row = self._fetchone(
            "SELECT 1 FROM user_roles WHERE user_id = ? AND role = ? LIMIT 1",
            (user_id, Role(role).value),
        )
        return row is not None
