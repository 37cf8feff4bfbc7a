from datetime import datetime

import pytest
import pytz

from momentum.config import PointsMode
from momentum.core.models import Reminder
from momentum.core.storage import MemoryStorage
from momentum.services.reminder_service import ReminderService

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=pytz.utc)
TODAY = "2024-06-01"


def make_reminder(reminder_id: str, title: str = "Task", completed: bool = False,
                  created_at: str = "2024-06-01T09:00:00+00:00", **kwargs) -> Reminder:
    return Reminder(id=reminder_id, title=title, completed=completed, created_at=created_at, **kwargs)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def make_service(storage):
    def _make(points_mode: PointsMode = PointsMode.DERIVED, backing: MemoryStorage = None) -> ReminderService:
        return ReminderService(
            storage=backing or storage,
            points_mode=points_mode,
            clock=lambda: FIXED_NOW,
        )
    return _make


@pytest.fixture
def service(make_service) -> ReminderService:
    return make_service()
