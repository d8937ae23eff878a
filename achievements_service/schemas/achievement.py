"""
Pydantic схемы для ачивок
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, List, Optional
from datetime import datetime
from uuid import UUID

from achievements_service.models.achievement import AchievementCategory, AchievementRarity


class CamelModel(BaseModel):
    """Базовая схема: camelCase в JSON, snake_case в Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AchievementResponse(CamelModel):
    """Ачивка из каталога"""
    id: UUID
    key: str
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    category: AchievementCategory
    rarity: AchievementRarity
    points: int
    requirement: Any
    is_active: bool


class UserAchievementResponse(CamelModel):
    """Прогресс пользователя по ачивке вместе с самой ачивкой"""
    id: UUID
    user_id: UUID
    achievement_id: UUID
    progress: float
    is_completed: bool
    unlocked_at: Optional[datetime] = None
    achievement: AchievementResponse


class UserAchievementsSummary(CamelModel):
    """Ответ get-my-achievements"""
    achievements: List[UserAchievementResponse]
    total_points: int
    completed_count: int
    total_count: int


class CheckAchievementsResponse(CamelModel):
    """Ответ check-achievements: только ачивки, разблокированные этим вызовом"""
    new_achievements: List[AchievementResponse]


class InitializeAchievementsResponse(CamelModel):
    """Ответ на засев каталога"""
    message: str
    created: int
