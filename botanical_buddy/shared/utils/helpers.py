"""
General helper functions shared across modules.
"""

from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Current calendar date in UTC."""
    return utcnow().date()
