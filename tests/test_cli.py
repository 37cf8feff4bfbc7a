import json

import pytest

from momentum.core.storage import MemoryStorage, StorageError
from momentum.main import main
from momentum.services.reminder_service import ReminderService


def run(capsys, service, *argv):
    code = main(list(argv), service=service)
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_add_and_list(capsys, service):
    code, out, _ = run(capsys, service, "add", "Call mom", "--due", "2024-06-01", "-c", "Personal")
    assert code == 0
    assert "Call mom" in out

    code, out, _ = run(capsys, service, "list", "--filter", "today")
    assert code == 0
    assert "Call mom" in out
    assert "today 1" in out


def test_add_blank_title_fails(capsys, service):
    code, _, err = run(capsys, service, "add", "   ")
    assert code == 1
    assert "title" in err
    assert service.list() == []


def test_add_bad_date_fails(capsys, service):
    code, _, err = run(capsys, service, "add", "Task", "--due", "tomorrow")
    assert code == 1
    assert "due date" in err


def test_done_by_prefix(capsys, service):
    reminder = service.add("Finish report")

    code, out, _ = run(capsys, service, "done", reminder.id[:8])

    assert code == 0
    assert "completed" in out
    assert service.get(reminder.id).completed is True
    assert service.points == 10


def test_unknown_id_fails(capsys, service):
    code, _, err = run(capsys, service, "delete", "nope")
    assert code == 1
    assert "No reminder" in err


def test_edit(capsys, service):
    reminder = service.add("Draft")

    code, out, _ = run(capsys, service, "edit", reminder.id, "--title", "Final", "-c", "Work")

    assert code == 0
    assert service.get(reminder.id).title == "Final"
    assert service.get(reminder.id).category == "Work"


def test_edit_without_changes_fails(capsys, service):
    reminder = service.add("Draft")
    code, _, err = run(capsys, service, "edit", reminder.id)
    assert code == 1
    assert "Nothing to change" in err


def test_delete(capsys, service):
    reminder = service.add("Gone soon")
    code, _, _ = run(capsys, service, "delete", reminder.id)
    assert code == 0
    assert service.list() == []


def test_stats_json(capsys, service):
    reminder = service.add("Task")
    service.toggle_complete(reminder.id)

    code, out, _ = run(capsys, service, "stats", "--json")

    assert code == 0
    data = json.loads(out)
    assert data["total_points"] == 10
    assert data["level"] == 1
    assert data["streak"] == 1
    assert data["counts"]["completed"] == 1


def test_stats_text_and_achievements(capsys, service):
    code, out, _ = run(capsys, service, "stats")
    assert code == 0
    assert "Total points: 0" in out

    code, out, _ = run(capsys, service, "achievements")
    assert code == 0
    assert "First Step" in out
    assert "0/1" in out


def test_theme(capsys, service):
    code, out, _ = run(capsys, service, "theme", "toggle")
    assert code == 0
    assert "on" in out
    assert service.dark_mode is True

    code, out, _ = run(capsys, service, "theme")
    assert "Dark mode: on" in out


def test_invalid_filter_exits(service):
    with pytest.raises(SystemExit):
        main(["list", "--filter", "someday"], service=service)


class ReadOnlyStorage(MemoryStorage):
    def write(self, key, value):
        raise StorageError(f"Cannot write {key}: disk is read-only")


def test_write_failure_exits_with_error(capsys):
    service = ReminderService(storage=ReadOnlyStorage())

    code, _, err = run(capsys, service, "add", "Unsaved")

    assert code == 1
    assert "Storage error" in err
    assert "read-only" in err
