"""InterviewBook CLI - Command-line interface for operating the service.

Usage:
    interviewbook serve --port 8000
    interviewbook init-db
    interviewbook create-admin --email admin@example.com --name "Ada Admin"
    interviewbook slots --date 2026-10-19
    interviewbook send-confirmation --booking-id bkg_1234abcd5678
"""

import argparse
import logging

from interviewbook.cli import commands, validators
from interviewbook.cli.commands import (
    cmd_create_admin,
    cmd_init_db,
    cmd_send_confirmation,
    cmd_serve,
    cmd_slots,
)
from interviewbook.cli.validators import parse_date
from interviewbook.config import HOST, LOG_LEVEL, PORT

__all__ = [
    # Submodules
    "commands",
    "validators",
    # Entry points
    "main",
    "create_parser",
]


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the CLI argument parser.

    Returns:
        Configured ArgumentParser for testing and main().
    """
    parser = argparse.ArgumentParser(
        description="InterviewBook - interview slot scheduling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db", type=str, default=None, help="SQLite path (default: INTERVIEWBOOK_DB_PATH)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=HOST, help="Bind address")
    serve_parser.add_argument("--port", "-p", type=int, default=PORT, help="Port")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes"
    )
    serve_parser.set_defaults(func=cmd_serve)

    # Init-db command
    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(func=cmd_init_db)

    # Create-admin command
    admin_parser = subparsers.add_parser(
        "create-admin", help="Create an admin user and print its token"
    )
    admin_parser.add_argument("--email", "-e", required=True, help="Admin email")
    admin_parser.add_argument("--name", "-n", default=None, help="Full name")
    admin_parser.set_defaults(func=cmd_create_admin)

    # Slots command
    slots_parser = subparsers.add_parser("slots", help="Show slots for a date")
    slots_parser.add_argument(
        "--date", "-d", type=parse_date, required=True, help="Date (YYYY-MM-DD)"
    )
    slots_parser.set_defaults(func=cmd_slots)

    # Send-confirmation command
    confirm_parser = subparsers.add_parser(
        "send-confirmation", help="Send the confirmation email for a booking"
    )
    confirm_parser.add_argument(
        "--booking-id", "-b", required=True, help="Booking ID"
    )
    confirm_parser.set_defaults(func=cmd_send_confirmation)

    return parser


def main():
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
