from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

# Модели вывода прогресса (CLI --json)


class AchievementStatus(BaseModel):
    achievement_id: str
    name: str
    description: str
    icon: str
    points: int = 0  # номинал, в total_points не входит
    unlocked: bool = False
    progress: int = 0
    target: int = Field(1, ge=1)
    metric: str = "completed_count"


class RecentCompletion(BaseModel):
    reminder_id: str
    title: str
    category: str
    completed_at: str
    points: int = 10


class FilterCounts(BaseModel):
    all: int = 0
    active: int = 0
    completed: int = 0
    today: int = 0
    upcoming: int = 0
    overdue: int = 0


class ProgressSnapshot(BaseModel):
    total_points: int = Field(0, ge=0)
    level: int = Field(1, ge=1)
    points_to_next_level: int
    level_progress: int = Field(0, ge=0, le=100)
    completed_count: int = 0
    active_count: int = 0
    streak: int = Field(0, ge=0)
    achievements: List[AchievementStatus] = Field(default_factory=list)
    recent_completions: List[RecentCompletion] = Field(default_factory=list)
    counts: Optional[FilterCounts] = None

    @field_validator('points_to_next_level')
    @classmethod
    def validate_points_to_next_level(cls, v):
        if v <= 0:
            raise ValueError('points_to_next_level должен быть положительным')
        return v

    @property
    def unlocked_count(self) -> int:
        return sum(1 for a in self.achievements if a.unlocked)
