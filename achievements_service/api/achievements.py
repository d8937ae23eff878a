"""
API endpoints для ачивок
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from uuid import UUID

from achievements_service.database import get_db
from achievements_service.models.user import User
from achievements_service.schemas.achievement import (
    AchievementResponse,
    CheckAchievementsResponse,
    InitializeAchievementsResponse,
    UserAchievementsSummary,
)
from achievements_service.services.achievement_catalog import seed_default_achievements
from achievements_service.services.achievement_service import AchievementService
from achievements_service.utils.permissions import get_current_user

router = APIRouter(prefix="/achievements", tags=["achievements"])


def get_achievement_service() -> AchievementService:
    """Dependency: сервис ачивок (в тестах переопределяется)"""
    return AchievementService()


@router.get("", response_model=List[AchievementResponse])
async def list_catalog(
    db: AsyncSession = Depends(get_db),
    service: AchievementService = Depends(get_achievement_service)
):
    """
    Все активные ачивки каталога

    Нужны клиенту, чтобы показать ещё закрытые ачивки
    """
    return await service.list_catalog(db)


@router.post("/check", response_model=CheckAchievementsResponse)
async def check_achievements(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: AchievementService = Depends(get_achievement_service)
):
    """
    Проверить ачивки текущего пользователя

    Вызывается клиентом после действий пользователя (пост, видео, история).
    Возвращает только ачивки, разблокированные этим вызовом.
    """
    user_id = current_user.id
    new_achievements = await service.run(db, user_id)
    return CheckAchievementsResponse(new_achievements=new_achievements)


@router.get("/me", response_model=UserAchievementsSummary)
async def get_my_achievements(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    service: AchievementService = Depends(get_achievement_service)
):
    """
    Мои ачивки

    Сначала выполняется проход проверки, затем возвращается прогресс
    """
    user_id = current_user.id
    return await service.get_user_achievements(db, user_id, check=True)


@router.get("/user/{user_id}", response_model=UserAchievementsSummary)
async def get_user_achievements(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
    service: AchievementService = Depends(get_achievement_service)
):
    """
    Ачивки пользователя по ID (без прохода проверки)
    """
    result = await db.execute(select(User.id).where(User.id == user_id))
    if result.scalar_one_or_none() is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return await service.get_user_achievements(db, user_id, check=False)


@router.post("/initialize", response_model=InitializeAchievementsResponse)
async def initialize_achievements(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Засеять каталог ачивками по умолчанию

    Существующие ачивки не перезаписываются
    """
    created = await seed_default_achievements(db)
    return InitializeAchievementsResponse(
        message="Achievements initialized successfully",
        created=created
    )
