# app/helpers/time.py
from datetime import date, datetime, time, timezone
from typing import Union


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def parse_day(value: Union[str, date]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def slot_key(value: Union[str, time]) -> str:
    """Canonical HH:MM form of a time-of-day ("9:00", "09:00:00" -> "09:00")."""
    if isinstance(value, time):
        return value.strftime("%H:%M")
    text = str(value).strip()
    if len(text) == 4 and text[1] == ":":
        text = "0" + text
    return time.fromisoformat(text).strftime("%H:%M")


def is_future(moment: datetime) -> bool:
    """Naive values are clinic wall-clock times and are compared as UTC."""
    if moment.tzinfo is None:
        return moment > utcnow().replace(tzinfo=None)
    return moment > utcnow()
