# services/reminder_service.py

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Union

from momentum.config import MomentumConfig, PointsMode
from momentum.core.models import (
    EDITABLE_FIELDS,
    FilterType,
    Reminder,
    ReminderCategory,
    ValidationError,
    reminders_from_list,
    reminders_to_list,
)
from momentum.core.storage import (
    DARK_MODE_KEY,
    POINTS_KEY,
    REMINDERS_KEY,
    JsonFileStorage,
    StorageError,
    StoragePort,
)
from momentum.services import gamification
from momentum.services.filters import count_by_filter, filter_reminders
from momentum.shared.models import FilterCounts, ProgressSnapshot
from momentum.utils.datetime_utils import DEFAULT_TZ, now_utc, today_str
from momentum.utils.validators import is_valid_task_title

logger = logging.getLogger(__name__)


class ReminderService:
    """
    Состояние приложения: напоминания, очки, тёмная тема

    Возможности:
    - Создание, переключение, редактирование, удаление напоминаний
    - Запись всего состояния в хранилище при каждом изменении
    - Фильтрация и счётчики по режимам
    - Очки, уровень, стрик и достижения
    """

    def __init__(self, storage: StoragePort,
                 points_mode: PointsMode = PointsMode.DERIVED,
                 points_per_task: int = gamification.POINTS_PER_TASK,
                 points_per_level: int = gamification.POINTS_PER_LEVEL,
                 tz=DEFAULT_TZ,
                 clock: Callable[[], datetime] = now_utc):
        self.storage = storage
        self.points_mode = points_mode
        self.points_per_task = points_per_task
        self.points_per_level = points_per_level
        self.tz = tz
        self.clock = clock

        self._reminders: List[Reminder] = self._load_reminders()
        self._points: int = self._load_points()
        self._dark_mode: bool = self._load_dark_mode()

        logger.info(
            f"✅ ReminderService инициализирован: {len(self._reminders)} напоминаний, "
            f"{self._points} очков ({self.points_mode.value})"
        )

    @classmethod
    def from_config(cls, config: MomentumConfig, storage: Optional[StoragePort] = None,
                    clock: Callable[[], datetime] = now_utc) -> "ReminderService":
        return cls(
            storage=storage or JsonFileStorage(config.storage.data_dir),
            points_mode=config.gamification.points_mode,
            points_per_task=config.gamification.points_per_task,
            points_per_level=config.gamification.points_per_level,
            tz=config.timezone,
            clock=clock,
        )

    # ===== ЗАГРУЗКА =====

    def _read(self, key: str) -> Optional[Any]:
        """Значение ключа; повреждённое или нечитаемое -> None"""
        try:
            return self.storage.read(key)
        except StorageError as e:
            logger.warning(f"⚠️ {key}: используем значение по умолчанию ({e})")
            return None

    def _load_reminders(self) -> List[Reminder]:
        data = self._read(REMINDERS_KEY)
        if data is None:
            return []
        try:
            return reminders_from_list(data)
        except ValidationError as e:
            logger.warning(f"⚠️ {REMINDERS_KEY}: {e}; начинаем с пустого списка")
            return []

    def _load_points(self) -> int:
        fallback = gamification.derived_points(self._reminders, self.points_per_task)
        if self.points_mode == PointsMode.DERIVED:
            return fallback

        data = self._read(POINTS_KEY)
        if data is not None:
            # bool является подклассом int, его не принимаем
            if not isinstance(data, bool) and isinstance(data, int) and data >= 0:
                return data
            logger.warning(f"⚠️ {POINTS_KEY}: некорректное значение {data!r}, пересчитываем")

        # Счётчик инициализируется один раз и дальше живёт сам по себе
        self.storage.write(POINTS_KEY, fallback)
        logger.info(f"🔢 {POINTS_KEY}: счётчик инициализирован значением {fallback}")
        return fallback

    def _load_dark_mode(self) -> bool:
        data = self._read(DARK_MODE_KEY)
        if data is None:
            return False
        if not isinstance(data, bool):
            logger.warning(f"⚠️ {DARK_MODE_KEY}: некорректное значение {data!r}")
            return False
        return data

    # ===== СОХРАНЕНИЕ =====

    def _save_reminders(self) -> None:
        self.storage.write(REMINDERS_KEY, reminders_to_list(self._reminders))

    def _save_points(self) -> None:
        self.storage.write(POINTS_KEY, self._points)

    # ===== ЧТЕНИЕ =====

    @property
    def points(self) -> int:
        return self._points

    @property
    def dark_mode(self) -> bool:
        return self._dark_mode

    def list(self) -> List[Reminder]:
        """Копия коллекции в порядке хранения (новые первыми)"""
        return list(self._reminders)

    def get(self, reminder_id: str) -> Optional[Reminder]:
        for reminder in self._reminders:
            if reminder.id == reminder_id:
                return reminder
        return None

    def match_ids(self, prefix: str) -> List[str]:
        """Идентификаторы, начинающиеся с prefix (точное совпадение приоритетно)"""
        if self.get(prefix) is not None:
            return [prefix]
        return [r.id for r in self._reminders if prefix and r.id.startswith(prefix)]

    def today(self) -> str:
        return today_str(self.tz, self.clock())

    def _index(self, reminder_id: str) -> Optional[int]:
        for index, reminder in enumerate(self._reminders):
            if reminder.id == reminder_id:
                return index
        return None

    # ===== ОСНОВНЫЕ МЕТОДЫ =====

    def add(self, title: str, description: Optional[str] = None,
            due_date: Optional[str] = None, due_time: Optional[str] = None,
            category: str = ReminderCategory.PERSONAL.value) -> Reminder:
        """Создать напоминание и поставить его в начало списка"""
        if not is_valid_task_title(title):
            raise ValidationError("title must not be empty")

        reminder = Reminder.create(
            title=title,
            description=description,
            due_date=due_date,
            due_time=due_time,
            category=category,
            now=self.clock(),
        )
        self._reminders.insert(0, reminder)
        self._save_reminders()

        logger.info(f"✅ Создано напоминание {reminder.id}: {reminder.title}")
        return reminder

    def toggle_complete(self, reminder_id: str) -> Optional[Reminder]:
        """Переключить выполнение; неизвестный id игнорируется"""
        index = self._index(reminder_id)
        if index is None:
            logger.debug(f"toggle_complete: напоминание {reminder_id} не найдено")
            return None

        reminder = self._reminders[index].toggled(self.clock())
        self._reminders[index] = reminder

        if self.points_mode == PointsMode.DERIVED:
            self._points = gamification.derived_points(self._reminders, self.points_per_task)
        else:
            self._points = gamification.adjust_points(self._points, reminder.completed, self.points_per_task)

        self._save_reminders()
        self._save_points()

        if reminder.completed:
            logger.info(f"✅ Напоминание {reminder_id} выполнено (+{self.points_per_task}, всего {self._points})")
        else:
            logger.info(f"↩️ Выполнение {reminder_id} отменено (всего {self._points})")
        return reminder

    def edit(self, reminder_id: str, **updates) -> Optional[Reminder]:
        """Частичное обновление полей; пустой заголовок отклоняется"""
        index = self._index(reminder_id)
        if index is None:
            logger.debug(f"edit: напоминание {reminder_id} не найдено")
            return None

        unknown = set(updates) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {sorted(unknown)}")

        if "title" in updates and not is_valid_task_title(updates["title"]):
            raise ValidationError("title must not be empty")

        # Пустая строка очищает необязательное поле
        cleaned: Dict[str, Any] = {}
        for field_name, value in updates.items():
            if field_name in ("description", "due_date", "due_time") and isinstance(value, str) and not value.strip():
                value = None
            cleaned[field_name] = value

        reminder = self._reminders[index].with_updates(cleaned)
        if reminder == self._reminders[index]:
            return reminder

        self._reminders[index] = reminder
        self._save_reminders()

        logger.info(f"✏️ Напоминание {reminder_id} обновлено: {sorted(cleaned)}")
        return reminder

    def delete(self, reminder_id: str) -> bool:
        """Удалить напоминание; неизвестный id игнорируется"""
        index = self._index(reminder_id)
        if index is None:
            logger.debug(f"delete: напоминание {reminder_id} не найдено")
            return False

        removed = self._reminders.pop(index)
        self._save_reminders()

        if self.points_mode == PointsMode.DERIVED and removed.completed:
            self._points = gamification.derived_points(self._reminders, self.points_per_task)
            self._save_points()

        logger.info(f"🗑️ Напоминание {reminder_id} удалено")
        return True

    # ===== ТЕМА =====

    def set_dark_mode(self, enabled: bool) -> bool:
        self._dark_mode = bool(enabled)
        self.storage.write(DARK_MODE_KEY, self._dark_mode)
        return self._dark_mode

    def toggle_dark_mode(self) -> bool:
        return self.set_dark_mode(not self._dark_mode)

    # ===== ПРОИЗВОДНЫЕ ЗНАЧЕНИЯ =====

    def filtered(self, mode: Union[FilterType, str] = FilterType.ALL) -> List[Reminder]:
        return filter_reminders(self._reminders, mode, self.today())

    def counts(self) -> FilterCounts:
        return count_by_filter(self._reminders, self.today())

    @property
    def level(self) -> int:
        return gamification.get_level(self._points, self.points_per_level)

    @property
    def points_to_next_level(self) -> int:
        return gamification.points_to_next_level(self._points, self.points_per_level)

    @property
    def streak(self) -> int:
        return gamification.calculate_streak(self._reminders, self.today(), self.tz)

    def snapshot(self) -> ProgressSnapshot:
        return gamification.build_snapshot(
            self._reminders,
            self._points,
            self.today(),
            counts=self.counts(),
            tz=self.tz,
            per_task=self.points_per_task,
            per_level=self.points_per_level,
        )
