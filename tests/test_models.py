from datetime import datetime

import pytest
import pytz

from conftest import make_reminder
from momentum.core.models import (
    Reminder,
    ReminderCategory,
    ValidationError,
    reminders_from_list,
    reminders_to_list,
)


def test_create_assigns_id_timestamp_and_defaults():
    now = datetime(2024, 6, 1, 8, 30, tzinfo=pytz.utc)
    reminder = Reminder.create("  Buy milk  ", now=now)

    assert reminder.id
    assert reminder.title == "Buy milk"
    assert reminder.completed is False
    assert reminder.completed_at is None
    assert reminder.category == ReminderCategory.PERSONAL.value
    assert reminder.created_at == now.isoformat()


def test_create_generates_unique_ids():
    ids = {Reminder.create("Same title").id for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_empty_title_rejected(title):
    with pytest.raises(ValidationError):
        Reminder.create(title)


def test_invalid_fields_rejected():
    with pytest.raises(ValidationError):
        Reminder.create("x", category="Hobby")
    with pytest.raises(ValidationError):
        Reminder.create("x", due_date="01/06/2024")
    with pytest.raises(ValidationError):
        Reminder.create("x", due_date="2024-02-30")
    with pytest.raises(ValidationError):
        Reminder.create("x", due_time="25:00")


def test_blank_description_becomes_none():
    assert Reminder.create("x", description="   ").description is None


def test_round_trip_is_field_for_field_identical():
    reminders = [
        make_reminder("a", title="Plain"),
        make_reminder("b", title="Full", description="Details", due_date="2024-06-02",
                      due_time="09:15", category="Work", completed=True,
                      completed_at="2024-06-01T10:00:00+00:00"),
    ]

    restored = reminders_from_list(reminders_to_list(reminders))

    assert restored == reminders


def test_to_dict_uses_storage_keys_and_omits_missing_fields():
    data = make_reminder("a", due_date="2024-06-02").to_dict()

    assert data == {
        "id": "a",
        "title": "Task",
        "dueDate": "2024-06-02",
        "category": "Personal",
        "completed": False,
        "createdAt": "2024-06-01T09:00:00+00:00",
    }


def test_from_dict_accepts_browser_timestamps():
    reminder = Reminder.from_dict({
        "id": "x1",
        "title": "From the web app",
        "category": "Health",
        "completed": False,
        "createdAt": "2024-06-01T07:45:12.345Z",
    })
    assert reminder.created_at == "2024-06-01T07:45:12.345Z"


def test_reminders_from_list_skips_broken_and_duplicate_records():
    data = [
        make_reminder("a").to_dict(),
        {"id": "b", "title": "No timestamp"},
        "not an object",
        make_reminder("a", title="Duplicate").to_dict(),
        make_reminder("c").to_dict(),
    ]

    restored = reminders_from_list(data)

    assert [r.id for r in restored] == ["a", "c"]


def test_reminders_from_list_requires_list():
    with pytest.raises(ValidationError):
        reminders_from_list({"id": "a"})


def test_toggled_sets_and_clears_completed_at():
    now = datetime(2024, 6, 3, 18, 0, tzinfo=pytz.utc)
    reminder = make_reminder("a")

    done = reminder.toggled(now)
    assert done.completed is True
    assert done.completed_at == now.isoformat()

    reopened = done.toggled(now)
    assert reopened.completed is False
    assert reopened.completed_at is None
    assert reopened.created_at == reminder.created_at


def test_with_updates_revalidates_and_protects_identity():
    reminder = make_reminder("a")

    with pytest.raises(ValidationError):
        reminder.with_updates({"title": "  "})
    with pytest.raises(ValidationError):
        reminder.with_updates({"id": "other"})

    updated = reminder.with_updates({"title": "Renamed", "category": "Finance"})
    assert updated.id == "a"
    assert updated.title == "Renamed"
    assert reminder.title == "Task"


def test_is_overdue():
    assert make_reminder("a", due_date="2024-05-31").is_overdue("2024-06-01")
    assert not make_reminder("b", due_date="2024-06-01").is_overdue("2024-06-01")
    assert not make_reminder("c", due_date="2024-05-31", completed=True).is_overdue("2024-06-01")
    assert not make_reminder("d").is_overdue("2024-06-01")


def test_long_title_is_accepted():
    title = "x" * 500
    assert Reminder.create(title).title == title


def test_stored_empty_title_survives_loading():
    data = [
        {"id": "a", "title": "", "completed": True, "createdAt": "2024-06-01T09:00:00+00:00"},
        {"id": "b", "title": "y" * 250, "createdAt": "2024-06-01T09:00:00+00:00"},
    ]

    restored = reminders_from_list(data)

    assert [r.id for r in restored] == ["a", "b"]
    assert restored[0].title == ""
    assert reminders_to_list(restored)[0]["title"] == ""
