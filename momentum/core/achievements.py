#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Momentum v1.0 - Achievement System
Фиксированный набор достижений; состояние вычисляется, а не хранится

Версия: 1.0.0
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class AchievementType(Enum):
    """Типы достижений"""
    CUMULATIVE = "cumulative"  # Накопительное (число выполненных)
    STREAK = "streak"          # Последовательное выполнение

# ===== DATA CLASSES =====

@dataclass(frozen=True)
class AchievementDefinition:
    """Определение достижения"""
    achievement_id: str
    name: str
    description: str
    icon: str
    achievement_type: AchievementType
    target: int
    points: int  # Номинал для отображения, в счётчик очков не начисляется

    @property
    def metric(self) -> str:
        return "streak" if self.achievement_type == AchievementType.STREAK else "completed_count"

    def progress(self, completed_count: int, streak: int) -> int:
        """Текущий прогресс по метрике достижения"""
        value = streak if self.achievement_type == AchievementType.STREAK else completed_count
        return min(value, self.target)

    def is_unlocked(self, completed_count: int, streak: int) -> bool:
        return self.progress(completed_count, streak) >= self.target

@dataclass(frozen=True)
class AchievementState:
    """Вычисленное состояние достижения"""
    definition: AchievementDefinition
    unlocked: bool
    progress: int

    @property
    def progress_percentage(self) -> float:
        if self.definition.target == 0:
            return 100.0
        return min(100.0, self.progress / self.definition.target * 100)

# ===== REGISTRY =====

ACHIEVEMENTS: List[AchievementDefinition] = [
    AchievementDefinition("1", "First Step", "Complete your first task", "🎯",
                          AchievementType.CUMULATIVE, target=1, points=10),
    AchievementDefinition("2", "On Fire", "Complete 5 tasks", "🔥",
                          AchievementType.CUMULATIVE, target=5, points=50),
    AchievementDefinition("3", "Champion", "Complete 10 tasks", "🏆",
                          AchievementType.CUMULATIVE, target=10, points=100),
    AchievementDefinition("4", "Streak Master", "3 day streak", "⚡",
                          AchievementType.STREAK, target=3, points=75),
    AchievementDefinition("5", "Productivity Pro", "Complete 20 tasks", "⭐",
                          AchievementType.CUMULATIVE, target=20, points=200),
]

def evaluate_achievements(completed_count: int, streak: int,
                          definitions: List[AchievementDefinition] = None) -> List[AchievementState]:
    """Состояние всех достижений для заданных показателей"""
    states = []
    for definition in definitions or ACHIEVEMENTS:
        progress = definition.progress(completed_count, streak)
        states.append(AchievementState(
            definition=definition,
            unlocked=progress >= definition.target,
            progress=progress,
        ))

    logger.debug(
        f"Achievements evaluated: {sum(1 for s in states if s.unlocked)}/{len(states)} unlocked"
    )
    return states
