"""
SQLAlchemy модели
"""
from achievements_service.models.user import User
from achievements_service.models.content import Post, PostLike, PostHashtag, ShortVideo, Story, Follow
from achievements_service.models.achievement import (
    Achievement,
    AchievementCategory,
    AchievementRarity,
    UserAchievement,
)

__all__ = [
    "User",
    "Post",
    "PostLike",
    "PostHashtag",
    "ShortVideo",
    "Story",
    "Follow",
    "Achievement",
    "AchievementCategory",
    "AchievementRarity",
    "UserAchievement",
]
