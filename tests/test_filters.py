import pytest

from conftest import TODAY, make_reminder
from momentum.core.models import FilterType
from momentum.services.filters import count_by_filter, filter_reminders, overdue_reminders


@pytest.fixture
def reminders():
    return [
        make_reminder("due-today", due_date="2024-06-01"),
        make_reminder("due-tomorrow", due_date="2024-06-02", completed=True),
        make_reminder("no-date"),
        make_reminder("past", due_date="2024-05-20"),
        make_reminder("done-no-date", completed=True),
    ]


def test_all_is_identity(reminders):
    assert filter_reminders(reminders, FilterType.ALL, TODAY) == reminders


def test_active_and_completed_partition_the_collection(reminders):
    active = filter_reminders(reminders, "active", TODAY)
    completed = filter_reminders(reminders, "completed", TODAY)

    assert {r.id for r in active} & {r.id for r in completed} == set()
    assert len(active) + len(completed) == len(reminders)
    assert all(not r.completed for r in active)
    assert all(r.completed for r in completed)


def test_today_matches_exact_due_date_only():
    reminders = [
        make_reminder("first", due_date="2024-06-01"),
        make_reminder("second", due_date="2024-06-02"),
        make_reminder("third"),
    ]

    result = filter_reminders(reminders, "today", "2024-06-01")

    assert [r.id for r in result] == ["first"]


def test_upcoming_requires_strictly_later_date(reminders):
    result = filter_reminders(reminders, FilterType.UPCOMING, TODAY)
    assert [r.id for r in result] == ["due-tomorrow"]


def test_store_order_is_preserved(reminders):
    result = filter_reminders(reminders, "active", TODAY)
    assert [r.id for r in result] == ["due-today", "no-date", "past"]


def test_unknown_mode_raises(reminders):
    with pytest.raises(ValueError):
        filter_reminders(reminders, "someday", TODAY)


def test_counts(reminders):
    counts = count_by_filter(reminders, TODAY)

    assert counts.all == 5
    assert counts.active == 3
    assert counts.completed == 2
    assert counts.today == 1
    assert counts.upcoming == 1
    assert counts.overdue == 1


def test_overdue_reminders(reminders):
    assert [r.id for r in overdue_reminders(reminders, TODAY)] == ["past"]
