"""
Проверка требований ачивок по снимку статистики пользователя

Чистые функции: без I/O и без обращения к базе.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
import logging

from achievements_service.services.achievement_errors import MalformedRequirementError
from achievements_service.services.achievement_requirements import (
    BestOfCollection,
    CountTarget,
    DateBefore,
    Metric,
    parse_requirement,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserStatSnapshot:
    """Снимок статистики пользователя на один проход проверки"""
    posts: int
    videos: int
    stories: int
    following: int
    followers: int
    hashtags: int
    created_at: datetime
    max_post_likes: int
    max_video_views: int

    def count_for(self, metric: Metric) -> int:
        return getattr(self, Metric(metric).value)

    def best_of(self, collection: str, metric: str) -> int:
        if (collection, metric) == ("posts", "likes"):
            return self.max_post_likes
        if (collection, metric) == ("videos", "views"):
            return self.max_video_views
        raise MalformedRequirementError(f"No maximum for {collection}/{metric}")


@dataclass(frozen=True)
class Evaluation:
    """Результат проверки одного требования"""
    progress: float
    satisfied: bool
    warning: Optional[str] = None


def _as_utc(value: datetime) -> datetime:
    # SQLite отдаёт naive datetime даже для DateTime(timezone=True)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _evaluate_spec(stats: UserStatSnapshot, spec) -> Evaluation:
    if isinstance(spec, CountTarget):
        progress = stats.count_for(spec.metric)
        return Evaluation(progress=progress, satisfied=progress >= spec.target)

    if isinstance(spec, BestOfCollection):
        progress = stats.best_of(spec.collection, spec.metric)
        return Evaluation(progress=progress, satisfied=progress >= spec.target)

    if isinstance(spec, DateBefore):
        satisfied = _as_utc(stats.created_at) <= spec.cutoff
        return Evaluation(progress=1 if satisfied else 0, satisfied=satisfied)

    raise MalformedRequirementError(f"Unsupported requirement variant: {type(spec).__name__}")


def evaluate(stats: UserStatSnapshot, requirement: Any) -> Evaluation:
    """
    Проверить требование ачивки

    Args:
        stats: снимок статистики пользователя
        requirement: требование (модель, dict или JSON-строка)

    Returns:
        Evaluation(progress, satisfied). Для битого требования - (0, False) и warning,
        исключение наружу не пробрасывается.
    """
    try:
        spec = parse_requirement(requirement)
        return _evaluate_spec(stats, spec)
    except MalformedRequirementError as e:
        logger.warning(f"⚠️ Битое требование ачивки: {e}")
        return Evaluation(progress=0, satisfied=False, warning=str(e))
