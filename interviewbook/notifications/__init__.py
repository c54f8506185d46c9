"""Outbound notifications."""

from interviewbook.notifications.email import (
    dispatch_confirmation,
    render_confirmation,
    send_confirmation,
)

__all__ = [
    "dispatch_confirmation",
    "render_confirmation",
    "send_confirmation",
]
