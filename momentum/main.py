#!/usr/bin/env python3
"""
Momentum - командная строка
Использование: momentum add TITLE [--due YYYY-MM-DD] | list [--filter MODE] | done ID | edit ID | delete ID | stats | achievements | theme
"""

import sys
import argparse
import logging
from typing import List, Optional

from momentum.config import load_config
from momentum.core.models import FilterType, ReminderCategory, ValidationError
from momentum.core.storage import StorageError
from momentum.services.reminder_service import ReminderService
from momentum.ui import messages
from momentum.utils.logger import setup_logger

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Ошибка выполнения команды (сообщение показывается пользователю)"""
    pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="momentum", description="Reminders with points, levels and streaks")
    sub = parser.add_subparsers(dest="command", required=True)

    categories = [c.value for c in ReminderCategory]

    add = sub.add_parser("add", help="Add a reminder")
    add.add_argument("title")
    add.add_argument("-d", "--description")
    add.add_argument("--due", dest="due_date", help="Due date, YYYY-MM-DD")
    add.add_argument("--time", dest="due_time", help="Due time, HH:MM")
    add.add_argument("-c", "--category", choices=categories, default=ReminderCategory.PERSONAL.value)

    lst = sub.add_parser("list", help="List reminders")
    lst.add_argument("-f", "--filter", dest="mode", choices=[f.value for f in FilterType], default=FilterType.ALL.value)

    done = sub.add_parser("done", help="Toggle completion of a reminder")
    done.add_argument("id")

    edit = sub.add_parser("edit", help="Edit a reminder")
    edit.add_argument("id")
    edit.add_argument("--title")
    edit.add_argument("-d", "--description")
    edit.add_argument("--due", dest="due_date")
    edit.add_argument("--time", dest="due_time")
    edit.add_argument("-c", "--category", choices=categories)

    delete = sub.add_parser("delete", help="Delete a reminder")
    delete.add_argument("id")

    stats = sub.add_parser("stats", help="Show points, level and streak")
    stats.add_argument("--json", action="store_true", help="Print the snapshot as JSON")

    sub.add_parser("achievements", help="Show achievements")

    theme = sub.add_parser("theme", help="Show or change the dark mode preference")
    theme.add_argument("state", nargs="?", choices=["on", "off", "toggle"])

    return parser


def _resolve_id(service: ReminderService, prefix: str) -> str:
    matches = service.match_ids(prefix)
    if not matches:
        raise CommandError(f"No reminder matches id {prefix!r}")
    if len(matches) > 1:
        raise CommandError(f"Id {prefix!r} is ambiguous ({len(matches)} reminders)")
    return matches[0]


def cmd_add(service: ReminderService, args) -> str:
    reminder = service.add(
        title=args.title,
        description=args.description,
        due_date=args.due_date,
        due_time=args.due_time,
        category=args.category,
    )
    return f"Added [{reminder.id[:messages.SHORT_ID_LENGTH]}] {reminder.title}"


def cmd_list(service: ReminderService, args) -> str:
    today = service.today()
    reminders = service.filtered(args.mode)
    return messages.reminders_list_message(reminders, today) + "\n\n" + messages.counts_message(service.counts())


def cmd_done(service: ReminderService, args) -> str:
    reminder = service.toggle_complete(_resolve_id(service, args.id))
    state = "completed 🎉" if reminder.completed else "reopened"
    return f"{reminder.title}: {state} (points: {service.points}, level {service.level})"


def cmd_edit(service: ReminderService, args) -> str:
    updates = {
        name: getattr(args, name)
        for name in ("title", "description", "due_date", "due_time", "category")
        if getattr(args, name) is not None
    }
    if not updates:
        raise CommandError("Nothing to change")
    reminder = service.edit(_resolve_id(service, args.id), **updates)
    return f"Updated [{reminder.id[:messages.SHORT_ID_LENGTH]}] {reminder.title}"


def cmd_delete(service: ReminderService, args) -> str:
    reminder_id = _resolve_id(service, args.id)
    service.delete(reminder_id)
    return f"Deleted [{reminder_id[:messages.SHORT_ID_LENGTH]}]"


def cmd_stats(service: ReminderService, args) -> str:
    snapshot = service.snapshot()
    if args.json:
        return snapshot.model_dump_json(indent=2)
    return messages.stats_message(snapshot)


def cmd_achievements(service: ReminderService, args) -> str:
    return messages.achievements_message(service.snapshot())


def cmd_theme(service: ReminderService, args) -> str:
    if args.state == "on":
        service.set_dark_mode(True)
    elif args.state == "off":
        service.set_dark_mode(False)
    elif args.state == "toggle":
        service.toggle_dark_mode()
    return f"Dark mode: {'on' if service.dark_mode else 'off'}"


COMMANDS = {
    "add": cmd_add,
    "list": cmd_list,
    "done": cmd_done,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "stats": cmd_stats,
    "achievements": cmd_achievements,
    "theme": cmd_theme,
}


def main(argv: Optional[List[str]] = None, service: Optional[ReminderService] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        if service is None:
            config = load_config()
            setup_logger(config)
            service = ReminderService.from_config(config)

        print(COMMANDS[args.command](service, args))
        return 0

    except (ValidationError, CommandError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except StorageError as e:
        logger.error(f"❌ Ошибка хранилища: {e}")
        print(f"❌ Storage error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Ошибки конфигурации
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
