"""CLI command implementations.

Contains all cmd_* functions for CLI subcommands.
"""

import os
import sqlite3
import sys
from argparse import Namespace
from datetime import datetime

from interviewbook.cli.validators import validate_admin_args
from interviewbook.models import Role, SchedulingError
from interviewbook.storage import BookingDB


def _open_db(args: Namespace) -> BookingDB:
    db = BookingDB(getattr(args, "db", None))
    db.init_schema()
    return db


def cmd_serve(args: Namespace) -> None:
    """Run the API server.

    With --reload uvicorn imports the app in a worker process, so the
    database path travels through INTERVIEWBOOK_DB_PATH instead.
    """
    import uvicorn

    app = "interviewbook.main:app"
    if args.db:
        if args.reload:
            os.environ["INTERVIEWBOOK_DB_PATH"] = args.db
        else:
            from interviewbook.api import create_app

            app = create_app(db_path=args.db)

    print(f"\n🚀 Serving InterviewBook on http://{args.host}:{args.port}")
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def cmd_init_db(args: Namespace) -> None:
    """Create database tables."""
    db = _open_db(args)
    print(f"✅ Database ready: {db.db_path}")
    db.close()


def cmd_create_admin(args: Namespace) -> None:
    """Create an admin user and print its API token."""
    if not validate_admin_args(args):
        sys.exit(1)

    db = _open_db(args)
    try:
        user, token = db.create_user(args.email, args.name)
    except sqlite3.IntegrityError:
        print(f"❌ A user with email {args.email} already exists")
        db.close()
        sys.exit(1)

    db.grant_role(user.id, Role.ADMIN)
    db.close()

    print(f"\n👤 Admin created: {user.email} ({user.id})")
    print(f"🔑 API token: {token}")
    print("   Send it as 'Authorization: Bearer <token>' on /admin requests.\n")


def cmd_slots(args: Namespace) -> None:
    """Show the slot menu for a date."""
    from interviewbook.scheduling import get_slots_for_date

    db = _open_db(args)
    slots = get_slots_for_date(db, args.date, datetime.now())
    db.close()

    if not slots:
        print(f"No slots on {args.date:%A, %Y-%m-%d}.")
        return

    print(f"\n📅 Slots for {args.date:%A, %Y-%m-%d}:\n")
    for slot in slots:
        marker = "✅" if slot.available else "⛔"
        print(f"   {marker} {slot.label}")
    print()


def cmd_send_confirmation(args: Namespace) -> None:
    """Send (or re-send) the confirmation email for a booking."""
    from interviewbook.notifications import send_confirmation

    db = _open_db(args)
    try:
        result = send_confirmation(db, args.booking_id)
    except SchedulingError as e:
        print(f"❌ {e}")
        sys.exit(1)
    finally:
        db.close()

    print(f"📬 Confirmation sent for {args.booking_id}")
    if link := result.get("meeting_link"):
        print(f"   Meeting link: {link}")
