# services/gamification.py

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence, Union

from momentum.core.achievements import evaluate_achievements
from momentum.core.models import Reminder
from momentum.shared.models import (
    AchievementStatus,
    FilterCounts,
    ProgressSnapshot,
    RecentCompletion,
)
from momentum.utils.datetime_utils import (
    DEFAULT_TZ,
    add_days,
    parse_date,
    parse_timestamp,
    to_local_date,
)

logger = logging.getLogger(__name__)

POINTS_PER_TASK = 10
POINTS_PER_LEVEL = 100
RECENT_COMPLETIONS_LIMIT = 5


def completed_count(reminders: Iterable[Reminder]) -> int:
    return sum(1 for r in reminders if r.completed)


def derived_points(reminders: Iterable[Reminder], per_task: int = POINTS_PER_TASK) -> int:
    """Очки как функция от коллекции: per_task за каждое выполненное"""
    return completed_count(reminders) * per_task


def adjust_points(points: int, now_completed: bool, per_task: int = POINTS_PER_TASK) -> int:
    """Инкрементальная корректировка при переключении статуса (не ниже 0)"""
    if now_completed:
        return points + per_task
    return max(0, points - per_task)


def get_level(points: int, per_level: int = POINTS_PER_LEVEL) -> int:
    return points // per_level + 1


def points_to_next_level(points: int, per_level: int = POINTS_PER_LEVEL) -> int:
    return per_level - points % per_level


def level_progress(points: int, per_level: int = POINTS_PER_LEVEL) -> int:
    """Процент прохождения текущего уровня"""
    return int((points % per_level) * 100 // per_level)


def activity_date(reminder: Reminder, tz=DEFAULT_TZ) -> date:
    """Календарный день выполнения в заданной временной зоне"""
    return to_local_date(reminder.activity_timestamp, tz)


def calculate_streak(reminders: Iterable[Reminder], today: Union[date, str], tz=DEFAULT_TZ) -> int:
    """Сколько дней подряд, начиная с today и назад, было хотя бы одно выполнение"""
    if isinstance(today, str):
        today = parse_date(today)

    active_days = {activity_date(r, tz) for r in reminders if r.completed}
    if not active_days:
        return 0

    streak = 0
    check_date = today
    while check_date in active_days:
        streak += 1
        check_date = add_days(check_date, -1)

    return streak


def recent_completions(reminders: Iterable[Reminder], limit: int = RECENT_COMPLETIONS_LIMIT) -> List[Reminder]:
    """Последние выполненные напоминания, новые первыми"""
    completed = [r for r in reminders if r.completed]
    completed.sort(key=lambda r: parse_timestamp(r.activity_timestamp), reverse=True)
    return completed[:limit]


def build_snapshot(reminders: Sequence[Reminder], points: int, today: Union[date, str],
                   counts: Optional[FilterCounts] = None, tz=DEFAULT_TZ,
                   per_task: int = POINTS_PER_TASK,
                   per_level: int = POINTS_PER_LEVEL) -> ProgressSnapshot:
    """Сводка прогресса для вывода"""
    done = completed_count(reminders)
    streak = calculate_streak(reminders, today, tz)

    achievements = [
        AchievementStatus(
            achievement_id=state.definition.achievement_id,
            name=state.definition.name,
            description=state.definition.description,
            icon=state.definition.icon,
            points=state.definition.points,
            unlocked=state.unlocked,
            progress=state.progress,
            target=state.definition.target,
            metric=state.definition.metric,
        )
        for state in evaluate_achievements(done, streak)
    ]

    recent = [
        RecentCompletion(
            reminder_id=r.id,
            title=r.title,
            category=r.category,
            completed_at=r.activity_timestamp,
            points=per_task,
        )
        for r in recent_completions(reminders)
    ]

    return ProgressSnapshot(
        total_points=points,
        level=get_level(points, per_level),
        points_to_next_level=points_to_next_level(points, per_level),
        level_progress=level_progress(points, per_level),
        completed_count=done,
        active_count=len(reminders) - done,
        streak=streak,
        achievements=achievements,
        recent_completions=recent,
        counts=counts,
    )
