# services/filters.py

from typing import Callable, Dict, Iterable, List, Union

from momentum.core.models import FilterType, Reminder
from momentum.shared.models import FilterCounts


def _predicate(mode: FilterType, today: str) -> Callable[[Reminder], bool]:
    if mode == FilterType.ACTIVE:
        return lambda r: not r.completed
    if mode == FilterType.COMPLETED:
        return lambda r: r.completed
    if mode == FilterType.TODAY:
        return lambda r: r.due_date == today
    if mode == FilterType.UPCOMING:
        # ISO YYYY-MM-DD: строковое сравнение совпадает с хронологическим
        return lambda r: bool(r.due_date) and r.due_date > today
    return lambda r: True


def parse_filter(mode: Union[FilterType, str]) -> FilterType:
    if isinstance(mode, FilterType):
        return mode
    try:
        return FilterType(mode)
    except ValueError:
        valid = ", ".join(f.value for f in FilterType)
        raise ValueError(f"Unknown filter {mode!r}; expected one of: {valid}")


def filter_reminders(reminders: Iterable[Reminder], mode: Union[FilterType, str], today: str) -> List[Reminder]:
    """Подпоследовательность коллекции для режима фильтра; порядок сохраняется"""
    predicate = _predicate(parse_filter(mode), today)
    return [r for r in reminders if predicate(r)]


def count_by_filter(reminders: Iterable[Reminder], today: str) -> FilterCounts:
    """Счётчики для всех режимов фильтра плюс просроченные"""
    items = list(reminders)
    counts: Dict[str, int] = {
        mode.value: sum(1 for r in items if _predicate(mode, today)(r))
        for mode in FilterType
    }
    counts["overdue"] = sum(1 for r in items if r.is_overdue(today))
    return FilterCounts(**counts)


def overdue_reminders(reminders: Iterable[Reminder], today: str) -> List[Reminder]:
    return [r for r in reminders if r.is_overdue(today)]
