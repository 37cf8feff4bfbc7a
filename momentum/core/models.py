#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Momentum v1.0 - Core Data Models
Модели данных напоминаний с валидацией и сериализацией

Версия: 1.0.0
"""

import uuid
import logging
from datetime import datetime
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, replace
from enum import Enum

from momentum.utils.datetime_utils import now_utc, parse_timestamp
from momentum.utils.validators import is_valid_date, is_valid_time

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class ReminderCategory(Enum):
    """Категории напоминаний"""
    PERSONAL = "Personal"
    WORK = "Work"
    HEALTH = "Health"
    SHOPPING = "Shopping"
    FINANCE = "Finance"
    OTHER = "Other"

class FilterType(Enum):
    """Режимы фильтрации списка"""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"
    TODAY = "today"
    UPCOMING = "upcoming"

# Поля, которые разрешено менять через edit
EDITABLE_FIELDS = ("title", "description", "due_date", "due_time", "category")

# ===== VALIDATION HELPERS =====

class ValidationError(Exception):
    """Ошибка валидации данных"""
    pass

def validate_text(text: str, min_length: int = 1, max_length: Optional[int] = 1000, field_name: str = "text") -> str:
    """Валидация текстовых полей"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} must be a string")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} must contain at least {min_length} characters")

    if max_length is not None and len(text) > max_length:
        raise ValidationError(f"{field_name} must contain at most {max_length} characters")

    return text

def validate_enum_value(value: str, enum_class: type, field_name: str = "value") -> str:
    """Валидация значений enum"""
    try:
        enum_class(value)
        return value
    except ValueError:
        valid_values = [e.value for e in enum_class]
        raise ValidationError(f"{field_name} must be one of: {valid_values}")

# ===== CORE MODELS =====

@dataclass
class Reminder:
    """Напоминание пользователя"""
    id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[str] = None  # YYYY-MM-DD
    due_time: Optional[str] = None  # HH:MM
    category: str = ReminderCategory.PERSONAL.value
    completed: bool = False
    created_at: str = ""
    completed_at: Optional[str] = None

    def __post_init__(self):
        """Валидация после создания объекта"""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("id must be a non-empty string")

        # Пустой заголовок встречается в старых данных; add и edit его не пропускают
        self.title = validate_text(self.title, min_length=0, max_length=None, field_name="title")

        if self.description is not None:
            self.description = validate_text(self.description, min_length=0, max_length=None, field_name="description")
            if not self.description:
                self.description = None

        if self.due_date is not None and not is_valid_date(self.due_date):
            raise ValidationError(f"Invalid due date: {self.due_date!r} (expected YYYY-MM-DD)")

        if self.due_time is not None and not is_valid_time(self.due_time):
            raise ValidationError(f"Invalid due time: {self.due_time!r} (expected HH:MM)")

        self.category = validate_enum_value(self.category, ReminderCategory, "category")

        if not isinstance(self.completed, bool):
            raise ValidationError("completed must be a boolean")

        if not self.created_at:
            self.created_at = now_utc().isoformat()
        self._check_timestamp(self.created_at, "createdAt")

        if self.completed_at is not None:
            self._check_timestamp(self.completed_at, "completedAt")

    @staticmethod
    def _check_timestamp(value: Any, field_name: str) -> None:
        if not isinstance(value, str):
            raise ValidationError(f"{field_name} must be an ISO timestamp string")
        try:
            parse_timestamp(value)
        except ValueError:
            raise ValidationError(f"Invalid timestamp in {field_name}: {value!r}")

    # ===== PROPERTIES =====

    @property
    def activity_timestamp(self) -> str:
        """Момент, к которому относится выполнение (completed_at или created_at)"""
        return self.completed_at or self.created_at

    @property
    def category_emoji(self) -> str:
        """Emoji для категории"""
        category_emojis = {
            ReminderCategory.PERSONAL.value: "👤",
            ReminderCategory.WORK.value: "💼",
            ReminderCategory.HEALTH.value: "🏃",
            ReminderCategory.SHOPPING.value: "🛒",
            ReminderCategory.FINANCE.value: "💰",
            ReminderCategory.OTHER.value: "📋",
        }
        return category_emojis.get(self.category, "📋")

    # ===== METHODS =====

    def is_overdue(self, today: str) -> bool:
        """Срок прошёл, а напоминание не выполнено"""
        return bool(self.due_date) and self.due_date < today and not self.completed

    def toggled(self, now: Optional[datetime] = None) -> "Reminder":
        """Копия с переключённым статусом выполнения"""
        if self.completed:
            return replace(self, completed=False, completed_at=None)
        stamp = (now or now_utc()).isoformat()
        return replace(self, completed=True, completed_at=stamp)

    def with_updates(self, updates: Dict[str, Any]) -> "Reminder":
        """Копия с применёнными изменениями (повторная валидация)"""
        unknown = set(updates) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {sorted(unknown)}")
        if "title" in updates:
            validate_text(updates["title"], min_length=1, max_length=None, field_name="title")
        return replace(self, **updates)

    # ===== SERIALIZATION =====

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь (ключи как в хранилище)"""
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": self.due_date,
            "dueTime": self.due_time,
            "category": self.category,
            "completed": self.completed,
            "createdAt": self.created_at,
            "completedAt": self.completed_at,
        }
        return {key: value for key, value in data.items() if value is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reminder":
        """Десериализация из словаря"""
        if not isinstance(data, dict):
            raise ValidationError(f"Reminder record must be an object, got {type(data).__name__}")

        try:
            return cls(
                id=data["id"],
                title=data["title"],
                description=data.get("description"),
                due_date=data.get("dueDate") or None,
                due_time=data.get("dueTime") or None,
                category=data.get("category", ReminderCategory.PERSONAL.value),
                completed=data.get("completed", False),
                created_at=data["createdAt"],
                completed_at=data.get("completedAt"),
            )
        except KeyError as e:
            raise ValidationError(f"Reminder record is missing field {e}")

    @classmethod
    def create(cls, title: str, description: Optional[str] = None,
               due_date: Optional[str] = None, due_time: Optional[str] = None,
               category: str = ReminderCategory.PERSONAL.value,
               now: Optional[datetime] = None) -> "Reminder":
        """Создание нового напоминания"""
        title = validate_text(title, min_length=1, max_length=None, field_name="title")
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            due_date=due_date or None,
            due_time=due_time or None,
            category=category,
            created_at=(now or now_utc()).isoformat(),
        )

def reminders_to_list(reminders: List[Reminder]) -> List[Dict[str, Any]]:
    return [r.to_dict() for r in reminders]

def reminders_from_list(data: Any) -> List[Reminder]:
    """Загрузка коллекции; битые записи пропускаются"""
    if not isinstance(data, list):
        raise ValidationError(f"Reminder collection must be a list, got {type(data).__name__}")

    reminders = []
    seen_ids = set()
    for index, item in enumerate(data):
        try:
            reminder = Reminder.from_dict(item)
        except ValidationError as e:
            logger.warning(f"Skipping reminder #{index}: {e}")
            continue

        if reminder.id in seen_ids:
            logger.warning(f"Skipping reminder #{index}: duplicate id {reminder.id}")
            continue

        seen_ids.add(reminder.id)
        reminders.append(reminder)

    return reminders
