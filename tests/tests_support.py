"""Helpers shared by the route tests."""
from datetime import datetime, time, timedelta

from app.helpers.time import utcnow

PASSWORD = "secret123"

# Bookings must lie in the future, so test dates are relative to today
BOOKING_DAY = (utcnow() + timedelta(days=30)).date()
DAY = BOOKING_DAY.isoformat()
NEXT_DAY = (BOOKING_DAY + timedelta(days=1)).isoformat()
PREV_DAY = (BOOKING_DAY - timedelta(days=1)).isoformat()


def at(hour: int, minute: int = 0) -> datetime:
    """Naive wall-clock datetime on BOOKING_DAY."""
    return datetime.combine(BOOKING_DAY, time(hour, minute))


def iso_at(hour: int, minute: int = 0) -> str:
    return at(hour, minute).isoformat()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
