from datetime import date, datetime, timedelta
from typing import Optional, Union

import pytz

DEFAULT_TZ = pytz.utc


def now_utc() -> datetime:
    return datetime.now(pytz.utc)


def now_local(tz=DEFAULT_TZ) -> datetime:
    return datetime.now(tz)


def today_str(tz=DEFAULT_TZ, now: Optional[datetime] = None) -> str:
    current = now or now_local(tz)
    if current.tzinfo is None:
        current = pytz.utc.localize(current)
    return current.astimezone(tz).strftime("%Y-%m-%d")


def parse_timestamp(value: str) -> datetime:
    """ISO timestamp -> aware datetime (наивное время считается UTC)"""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = pytz.utc.localize(parsed)
    return parsed


def to_local_date(value: Union[str, datetime], tz=DEFAULT_TZ) -> date:
    if isinstance(value, str):
        value = parse_timestamp(value)
    elif value.tzinfo is None:
        value = pytz.utc.localize(value)
    return value.astimezone(tz).date()


def add_days(dt: date, days: int) -> date:
    return dt + timedelta(days=days)


def parse_date(date_str: str, fmt: str = "%Y-%m-%d") -> date:
    return datetime.strptime(date_str, fmt).date()
