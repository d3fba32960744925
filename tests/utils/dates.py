"""Date helpers for tests that must satisfy the country booking rules."""

from datetime import UTC, datetime, timedelta


def next_weekday_at(weekday: int, hour: int) -> datetime:
    """Next ``weekday`` (0 = Monday) strictly after today, at ``hour`` UTC."""
    now = datetime.now(UTC)
    days_ahead = (weekday - now.weekday()) % 7 or 7
    day = now + timedelta(days=days_ahead)
    return day.replace(hour=hour, minute=0, second=0, microsecond=0)
