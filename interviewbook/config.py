"""Centralized configuration for the interviewbook package.

Provides paths, limits, and environment configuration
used across all modules.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Package root (interviewbook/ directory)
PACKAGE_ROOT = Path(__file__).parent

# Working directory (where the service is started from)
WORKING_DIR = Path.cwd()

# Load environment variables from current working directory
load_dotenv(WORKING_DIR / ".env")

# Directory paths
TEMPLATES_DIR = PACKAGE_ROOT / "templates"
OUTPUTS_DIR = WORKING_DIR / "outputs"
DATABASE_PATH = os.getenv("INTERVIEWBOOK_DB_PATH", str(OUTPUTS_DIR / "interviewbook.db"))

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = tuple(
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
)

# Email (Resend)
# API key expected in .env: RESEND_API_KEY
RESEND_API_KEY = os.getenv("RESEND_API_KEY", "")
CONFIRMATION_FROM_EMAIL = os.getenv(
    "CONFIRMATION_FROM_EMAIL", "InterviewBook <onboarding@resend.dev>"
)

# Booking rules
BOOKING_WINDOW_DAYS = int(os.getenv("BOOKING_WINDOW_DAYS", "60"))
DEFAULT_BOOKING_DURATION = int(os.getenv("DEFAULT_BOOKING_DURATION", "30"))
CALENDAR_EVENT_MINUTES = 30
MEETING_LINK_SETTING = "default_meeting_link"

# Rate limiting for the public booking form (slowapi syntax)
BOOKING_RATE_LIMIT = os.getenv("BOOKING_RATE_LIMIT", "30/minute")
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

# Field length ceilings enforced at the API boundary
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 255
MAX_PHONE_LENGTH = 20
MAX_ROLE_LENGTH = 100
MAX_NOTES_LENGTH = 1000
MAX_REASON_LENGTH = 200
MAX_MEETING_LINK_LENGTH = 500
