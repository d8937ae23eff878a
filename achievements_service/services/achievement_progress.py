"""
Хранилище прогресса пользователей по ачивкам
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy import or_, select, update
from typing import Dict, List
from uuid import UUID
from datetime import datetime

from achievements_service.models.achievement import UserAchievement


class ProgressStore:
    """Чтение и условная запись UserAchievement"""

    @staticmethod
    def _insert_for(db: AsyncSession):
        dialect = db.get_bind().dialect.name
        if dialect == "postgresql":
            return pg_insert
        if dialect == "sqlite":
            return sqlite_insert
        raise NotImplementedError(f"Upsert is not supported for dialect {dialect}")

    async def load_for_user(self, db: AsyncSession, user_id: UUID) -> Dict[UUID, UserAchievement]:
        """Все записи прогресса пользователя одним запросом: achievement_id -> запись"""
        result = await db.execute(
            select(UserAchievement).where(UserAchievement.user_id == user_id)
        )
        return {row.achievement_id: row for row in result.scalars().all()}

    async def record(
        self,
        db: AsyncSession,
        user_id: UUID,
        achievement_id: UUID,
        progress: float,
        satisfied: bool,
        now: datetime
    ) -> bool:
        """
        Записать прогресс (условный upsert)

        Завершённые записи не трогаются. unlocked_at выставляется только той
        записью, которая переводит is_completed из false (или отсутствия строки) в true.
        Незавершающая запись не перетирает прогресс, записанный по более
        свежему снимку (now - время снимка статистики).

        Returns:
            True, если именно эта запись разблокировала ачивку
        """
        insert = self._insert_for(db)
        insert_stmt = insert(UserAchievement).values(
            user_id=user_id,
            achievement_id=achievement_id,
            progress=progress,
            is_completed=satisfied,
            unlocked_at=now if satisfied else None,
            evaluated_at=now,
        ).on_conflict_do_nothing(
            index_elements=["user_id", "achievement_id"]
        ).returning(UserAchievement.id)

        result = await db.execute(insert_stmt)
        if result.scalar_one_or_none() is not None:
            return satisfied

        # Строка уже есть: обновляем только незавершённую
        values = {"progress": progress, "evaluated_at": now}
        conditions = [
            UserAchievement.user_id == user_id,
            UserAchievement.achievement_id == achievement_id,
            UserAchievement.is_completed == False
        ]
        if satisfied:
            values["is_completed"] = True
            values["unlocked_at"] = now
        else:
            conditions.append(or_(
                UserAchievement.evaluated_at.is_(None),
                UserAchievement.evaluated_at <= now
            ))

        update_stmt = update(UserAchievement).where(
            *conditions
        ).values(**values).returning(UserAchievement.id)

        result = await db.execute(update_stmt)
        flipped = result.scalar_one_or_none() is not None
        return satisfied and flipped

    async def list_for_user(self, db: AsyncSession, user_id: UUID) -> List[UserAchievement]:
        """Записи прогресса вместе с ачивкой, свежие разблокировки первыми"""
        query = select(UserAchievement).options(
            joinedload(UserAchievement.achievement)
        ).where(
            UserAchievement.user_id == user_id
        ).order_by(
            UserAchievement.unlocked_at.desc().nulls_last(),
            UserAchievement.created_at.asc()
        ).execution_options(populate_existing=True)

        result = await db.execute(query)
        return list(result.scalars().unique().all())
