"""Argument validators for CLI commands."""

import argparse
from datetime import date

from interviewbook.config import MAX_EMAIL_LENGTH


def parse_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from e


def validate_admin_args(args: argparse.Namespace) -> bool:
    """Validate create-admin arguments.

    Returns:
        True if valid, False otherwise (prints error message)
    """
    email = args.email.strip()
    if not email or "@" not in email:
        print("❌ Email must be a valid address")
        return False

    if len(email) > MAX_EMAIL_LENGTH:
        print(f"❌ Email must be at most {MAX_EMAIL_LENGTH} characters")
        return False

    args.email = email
    return True
