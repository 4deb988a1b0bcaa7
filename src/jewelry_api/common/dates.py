import datetime
from typing import Optional


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def as_utc(value: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
    """Normalise a timestamp to an aware UTC datetime; naive values are read as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def start_of_month(moment: datetime.datetime) -> datetime.datetime:
    moment = as_utc(moment)
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return the (year, month) pair ``delta`` calendar months away."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
