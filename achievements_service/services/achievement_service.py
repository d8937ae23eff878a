"""
Сервис ачивок: проход проверки, прогресс пользователя, каталог
"""
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Callable, List, Optional
from uuid import UUID
from datetime import datetime, timezone
import logging

from achievements_service.schemas.achievement import (
    AchievementResponse,
    UserAchievementResponse,
    UserAchievementsSummary,
)
from achievements_service.services.achievement_catalog import AchievementCatalog
from achievements_service.services.achievement_errors import StatisticsUnavailableError
from achievements_service.services.achievement_evaluator import evaluate
from achievements_service.services.achievement_progress import ProgressStore
from achievements_service.services.user_stats_service import UserStatsService

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AchievementService:
    """
    Проверка и разблокировка ачивок

    Зависимости передаются в конструктор, чтобы в тестах можно было
    подставить свой каталог, хранилище или часы.
    """

    def __init__(
        self,
        catalog: Optional[AchievementCatalog] = None,
        progress_store: Optional[ProgressStore] = None,
        stats_service: Optional[UserStatsService] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.catalog = catalog or AchievementCatalog()
        self.progress_store = progress_store or ProgressStore()
        self.stats_service = stats_service or UserStatsService()
        self.clock = clock

    async def run(self, db: AsyncSession, user_id: UUID) -> List[AchievementResponse]:
        """
        Один проход проверки ачивок пользователя

        Returns:
            Ачивки (в порядке каталога), которые разблокировал именно этот проход.
            Если снимок статистики получить не удалось - пустой список.
        """
        # Время снимка: по нему пишутся progress и unlocked_at
        taken_at = self.clock()
        try:
            stats = await self.stats_service.get_snapshot(db, user_id)
        except StatisticsUnavailableError as e:
            logger.warning(f"⚠️ Проверка ачивок пропущена: {e}")
            await db.rollback()
            return []

        try:
            catalog = [AchievementResponse.model_validate(a) for a in await self.catalog.list_active(db)]
            existing = await self.progress_store.load_for_user(db, user_id)
        except Exception as e:
            logger.error(f"❌ Не удалось загрузить каталог или прогресс пользователя {user_id}: {e}", exc_info=True)
            await db.rollback()
            return []

        completed_ids = {achievement_id for achievement_id, row in existing.items() if row.is_completed}
        # Закрываем транзакцию чтения до начала записей
        await db.commit()

        new_achievements = []
        for achievement in catalog:
            if achievement.id in completed_ids:
                logger.debug(f"Ачивка {achievement.key} уже получена пользователем {user_id}, пропускаем")
                continue

            try:
                evaluation = evaluate(stats, achievement.requirement)
                unlocked = await self.progress_store.record(
                    db,
                    user_id=user_id,
                    achievement_id=achievement.id,
                    progress=evaluation.progress,
                    satisfied=evaluation.satisfied,
                    now=taken_at,
                )
                await db.commit()
            except Exception as e:
                await db.rollback()
                logger.error(
                    f"❌ Ошибка проверки ачивки {achievement.key} для пользователя {user_id}: {e}",
                    exc_info=True
                )
                continue

            if unlocked:
                logger.info(f"🏆 Пользователь {user_id} получил ачивку {achievement.key}")
                new_achievements.append(achievement)

        return new_achievements

    async def get_user_achievements(
        self,
        db: AsyncSession,
        user_id: UUID,
        check: bool = True
    ) -> UserAchievementsSummary:
        """
        Прогресс пользователя по ачивкам

        Args:
            check: сначала выполнить проход проверки (для /me)
        """
        if check:
            await self.run(db, user_id)

        rows = await self.progress_store.list_for_user(db, user_id)
        achievements = [UserAchievementResponse.model_validate(row) for row in rows]
        completed = [a for a in achievements if a.is_completed]

        return UserAchievementsSummary(
            achievements=achievements,
            total_points=sum(a.achievement.points for a in completed),
            completed_count=len(completed),
            total_count=len(achievements),
        )

    async def list_catalog(self, db: AsyncSession) -> List[AchievementResponse]:
        """Активные ачивки каталога"""
        return [AchievementResponse.model_validate(a) for a in await self.catalog.list_active(db)]
