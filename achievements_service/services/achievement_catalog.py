"""
Каталог ачивок
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional
import logging

from achievements_service.models.achievement import Achievement, AchievementCategory, AchievementRarity
from achievements_service.services.achievement_requirements import (
    BestOfCollection,
    CountTarget,
    DateBefore,
    Metric,
    requirement_to_json,
)

logger = logging.getLogger(__name__)


# Ачивки по умолчанию
DEFAULT_ACHIEVEMENTS = [
    {
        "key": "first_post",
        "title": "First Steps",
        "description": "Share your first post",
        "icon": "👶",
        "category": AchievementCategory.MILESTONE,
        "rarity": AchievementRarity.COMMON,
        "points": 10,
        "requirement": CountTarget(metric=Metric.POSTS, target=1),
    },
    {
        "key": "social_butterfly",
        "title": "Social Butterfly",
        "description": "Follow 10 users",
        "icon": "🦋",
        "category": AchievementCategory.SOCIAL,
        "rarity": AchievementRarity.COMMON,
        "points": 25,
        "requirement": CountTarget(metric=Metric.FOLLOWING, target=10),
    },
    {
        "key": "content_creator",
        "title": "Content Creator",
        "description": "Share 50 posts",
        "icon": "📝",
        "category": AchievementCategory.CONTENT,
        "rarity": AchievementRarity.RARE,
        "points": 100,
        "requirement": CountTarget(metric=Metric.POSTS, target=50),
    },
    {
        "key": "popular_post",
        "title": "Trending Creator",
        "description": "Get 100 likes on a single post",
        "icon": "🔥",
        "category": AchievementCategory.ENGAGEMENT,
        "rarity": AchievementRarity.EPIC,
        "points": 200,
        "requirement": BestOfCollection(collection="posts", metric="likes", target=100),
    },
    {
        "key": "video_star",
        "title": "Video Star",
        "description": "Upload your first short video",
        "icon": "🎬",
        "category": AchievementCategory.CONTENT,
        "rarity": AchievementRarity.COMMON,
        "points": 20,
        "requirement": CountTarget(metric=Metric.VIDEOS, target=1),
    },
    {
        "key": "viral_video",
        "title": "Viral Sensation",
        "description": "Get 1000 views on a video",
        "icon": "🚀",
        "category": AchievementCategory.ENGAGEMENT,
        "rarity": AchievementRarity.LEGENDARY,
        "points": 500,
        "requirement": BestOfCollection(collection="videos", metric="views", target=1000),
    },
    {
        "key": "early_bird",
        "title": "Early Bird",
        "description": "Join the platform in its early days",
        "icon": "🐦",
        "category": AchievementCategory.MILESTONE,
        "rarity": AchievementRarity.RARE,
        "points": 50,
        "requirement": DateBefore(cutoff="2025-12-31"),
    },
    {
        "key": "storyteller",
        "title": "Storyteller",
        "description": "Share 10 stories",
        "icon": "📖",
        "category": AchievementCategory.CONTENT,
        "rarity": AchievementRarity.COMMON,
        "points": 30,
        "requirement": CountTarget(metric=Metric.STORIES, target=10),
    },
    {
        "key": "trending_master",
        "title": "Trending Master",
        "description": "Use 20 different hashtags",
        "icon": "#️⃣",
        "category": AchievementCategory.ENGAGEMENT,
        "rarity": AchievementRarity.RARE,
        "points": 75,
        "requirement": CountTarget(metric=Metric.HASHTAGS, target=20),
    },
    {
        "key": "community_leader",
        "title": "Community Leader",
        "description": "Get 1000 followers",
        "icon": "👑",
        "category": AchievementCategory.SOCIAL,
        "rarity": AchievementRarity.LEGENDARY,
        "points": 1000,
        "requirement": CountTarget(metric=Metric.FOLLOWERS, target=1000),
    },
]


class AchievementCatalog:
    """Каталог ачивок (только чтение для движка)"""

    async def list_active(self, db: AsyncSession) -> List[Achievement]:
        """Активные ачивки в порядке каталога: категория, очки, ключ"""
        query = select(Achievement).where(
            Achievement.is_active == True
        ).order_by(
            Achievement.category.asc(),
            Achievement.points.asc(),
            Achievement.key.asc()
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_key(self, db: AsyncSession, key: str) -> Optional[Achievement]:
        result = await db.execute(select(Achievement).where(Achievement.key == key))
        return result.scalar_one_or_none()


async def seed_default_achievements(db: AsyncSession, definitions: Optional[List[dict]] = None) -> int:
    """
    Создать ачивки по умолчанию, которых ещё нет в базе

    Существующие записи не перезаписываются.

    Returns:
        Количество созданных ачивок
    """
    definitions = DEFAULT_ACHIEVEMENTS if definitions is None else definitions

    result = await db.execute(select(Achievement.key))
    existing_keys = set(result.scalars().all())

    created = 0
    for definition in definitions:
        if definition["key"] in existing_keys:
            continue

        data = dict(definition)
        requirement = data.pop("requirement")
        if not isinstance(requirement, dict):
            requirement = requirement_to_json(requirement)

        db.add(Achievement(requirement=requirement, is_active=True, **data))
        created += 1

    if created:
        await db.commit()
        logger.info(f"🏆 Создано ачивок по умолчанию: {created}")
    else:
        logger.debug("ℹ️ Все ачивки по умолчанию уже существуют")

    return created
