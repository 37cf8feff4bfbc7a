#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Momentum v1.0 - Core Package
Модели, достижения и хранилище
"""

from .models import (
    ReminderCategory,
    FilterType,
    ValidationError,
    Reminder
)

from .achievements import (
    AchievementDefinition,
    AchievementState,
    ACHIEVEMENTS,
    evaluate_achievements
)

from .storage import (
    StorageError,
    StorageCorruptionError,
    StoragePort,
    MemoryStorage,
    JsonFileStorage
)

__all__ = [
    # Models
    'ReminderCategory',
    'FilterType',
    'ValidationError',
    'Reminder',

    # Achievements
    'AchievementDefinition',
    'AchievementState',
    'ACHIEVEMENTS',
    'evaluate_achievements',

    # Storage
    'StorageError',
    'StorageCorruptionError',
    'StoragePort',
    'MemoryStorage',
    'JsonFileStorage'
]
