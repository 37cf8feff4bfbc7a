import re
from datetime import datetime

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def is_valid_task_title(title: str) -> bool:
    return isinstance(title, str) and bool(title.strip())


def is_valid_date(date_str: str) -> bool:
    if not isinstance(date_str, str) or not _DATE_RE.match(date_str):
        return False
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def is_valid_time(time_str: str) -> bool:
    return isinstance(time_str, str) and bool(_TIME_RE.match(time_str))
