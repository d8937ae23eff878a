"""
Сервисы для бизнес-логики
"""
from achievements_service.services.achievement_catalog import AchievementCatalog, seed_default_achievements
from achievements_service.services.achievement_progress import ProgressStore
from achievements_service.services.achievement_service import AchievementService
from achievements_service.services.user_stats_service import UserStatsService

__all__ = [
    "AchievementCatalog",
    "seed_default_achievements",
    "ProgressStore",
    "AchievementService",
    "UserStatsService",
]
