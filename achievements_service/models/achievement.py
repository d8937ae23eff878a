"""
Модели ачивок: каталог и прогресс пользователя
"""
from sqlalchemy import (
    Column, String, Integer, Float, Boolean, DateTime, ForeignKey, JSON, Enum,
    UniqueConstraint, CheckConstraint, Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum

from achievements_service.database import Base


class AchievementCategory(str, enum.Enum):
    """Категории ачивок"""
    MILESTONE = "milestone"
    SOCIAL = "social"
    CONTENT = "content"
    ENGAGEMENT = "engagement"


class AchievementRarity(str, enum.Enum):
    """Редкость ачивки"""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


class Achievement(Base):
    """Ачивка из каталога. Движок только читает эти записи."""
    __tablename__ = "achievements"
    __table_args__ = (
        UniqueConstraint("key", name="uq_achievements_key"),
        CheckConstraint("points > 0", name="achievements_points_positive"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    key = Column(String(64), nullable=False, index=True)  # 'first_post', 'social_butterfly', ...
    title = Column(String(128), nullable=False)
    description = Column(String(512), nullable=True)
    icon = Column(String(32), nullable=True)
    category = Column(
        Enum(AchievementCategory, name="achievement_category", native_enum=False, values_callable=_enum_values),
        nullable=False,
    )
    rarity = Column(
        Enum(AchievementRarity, name="achievement_rarity", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=AchievementRarity.COMMON,
    )
    points = Column(Integer, nullable=False)
    # {"kind": "count", "metric": "posts", "target": 1} или legacy {"type": "post_count", "target": 1}
    requirement = Column(JSON, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user_progress = relationship("UserAchievement", back_populates="achievement")

    def __repr__(self):
        return f"<Achievement {self.key}>"


class UserAchievement(Base):
    """Прогресс пользователя по ачивке (одна строка на пару user/achievement)"""
    __tablename__ = "user_achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievement"),
        CheckConstraint("progress >= 0", name="user_achievements_progress_non_negative"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    achievement_id = Column(Uuid(as_uuid=True), ForeignKey("achievements.id", ondelete="CASCADE"), nullable=False, index=True)
    progress = Column(Float, nullable=False, default=0)
    is_completed = Column(Boolean, nullable=False, default=False)
    # Выставляется один раз, когда is_completed переходит false -> true
    unlocked_at = Column(DateTime(timezone=True), nullable=True)
    # Время снимка статистики, по которому записан progress
    evaluated_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    achievement = relationship("Achievement", back_populates="user_progress")

    def __repr__(self):
        return f"<UserAchievement {self.user_id}/{self.achievement_id} completed={self.is_completed}>"
