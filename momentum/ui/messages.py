from typing import List

from momentum.core.models import Reminder
from momentum.shared.models import FilterCounts, ProgressSnapshot
from momentum.ui.progress import level_bar, streak_emoji

SHORT_ID_LENGTH = 8


def reminder_line(reminder: Reminder, today: str) -> str:
    status = "✅" if reminder.completed else "⬜️"
    parts = [f"{status} [{reminder.id[:SHORT_ID_LENGTH]}] {reminder.title}"]
    if reminder.due_date:
        due = reminder.due_date + (f" {reminder.due_time}" if reminder.due_time else "")
        parts.append(f"📅 {due}")
    parts.append(f"{reminder.category_emoji} {reminder.category}")
    if reminder.is_overdue(today):
        parts.append("⚠️ overdue")
    line = "  ".join(parts)
    if reminder.description:
        line += f"\n      {reminder.description}"
    return line


def reminders_list_message(reminders: List[Reminder], today: str) -> str:
    if not reminders:
        return "No reminders. Add one with `momentum add TITLE`."
    return "\n".join(reminder_line(r, today) for r in reminders)


def counts_message(counts: FilterCounts) -> str:
    return (
        f"all {counts.all} · active {counts.active} · completed {counts.completed} · "
        f"today {counts.today} · upcoming {counts.upcoming}"
    )


def stats_message(snapshot: ProgressSnapshot) -> str:
    lines = [
        f"⭐ Total points: {snapshot.total_points}",
        level_bar(snapshot.level, snapshot.level_progress, snapshot.points_to_next_level),
        f"🎯 Completed: {snapshot.completed_count}   ⬜️ Active: {snapshot.active_count}",
        f"{streak_emoji(snapshot.streak)} Day streak: {snapshot.streak}",
        f"🏅 Achievements: {snapshot.unlocked_count}/{len(snapshot.achievements)}",
    ]
    if snapshot.recent_completions:
        lines.append("")
        lines.append("Recent activity:")
        for item in snapshot.recent_completions:
            lines.append(f"  🏆 {item.title}  +{item.points} pts  ({item.completed_at[:16].replace('T', ' ')})")
    else:
        lines.append("")
        lines.append("Complete tasks to see your activity feed!")
    return "\n".join(lines)


def achievements_message(snapshot: ProgressSnapshot) -> str:
    lines = []
    for a in snapshot.achievements:
        mark = "✔" if a.unlocked else " "
        reward = f"+{a.points} pts" if a.unlocked else f"{a.progress}/{a.target}"
        lines.append(f"[{mark}] {a.icon} {a.name}: {a.description} ({reward})")
    return "\n".join(lines)
