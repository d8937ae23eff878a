"""
Pydantic схемы
"""
from achievements_service.schemas.achievement import (
    AchievementResponse,
    UserAchievementResponse,
    UserAchievementsSummary,
    CheckAchievementsResponse,
    InitializeAchievementsResponse,
)

__all__ = [
    "AchievementResponse",
    "UserAchievementResponse",
    "UserAchievementsSummary",
    "CheckAchievementsResponse",
    "InitializeAchievementsResponse",
]
