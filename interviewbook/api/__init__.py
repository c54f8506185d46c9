"""HTTP API for interview booking."""

from interviewbook.api.app import create_app

__all__ = ["create_app"]
