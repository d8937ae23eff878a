"""
Требования ачивок: закрытое размеченное объединение

Каждый вариант - отдельная pydantic-модель с полем-дискриминатором ``kind``.
В базе встречаются и старые записи вида {"type": "post_count", "target": 1},
они переводятся в канонический вид при разборе.
"""
from datetime import date, datetime, timezone
from typing import Annotated, Any, Dict, Literal, Union
import enum
import json

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from achievements_service.services.achievement_errors import MalformedRequirementError


class Metric(str, enum.Enum):
    """Счётчики пользователя, по которым работает CountTarget"""
    POSTS = "posts"
    VIDEOS = "videos"
    STORIES = "stories"
    FOLLOWING = "following"
    FOLLOWERS = "followers"
    HASHTAGS = "hashtags"


# Допустимые пары коллекция/метрика для BestOfCollection
BEST_OF_PAIRS = {
    ("posts", "likes"),
    ("videos", "views"),
}


class CountTarget(BaseModel):
    """Счётчик пользователя >= target"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["count"] = "count"
    metric: Metric
    target: int = Field(ge=0)


class BestOfCollection(BaseModel):
    """Лучший элемент коллекции (максимум метрики) >= target"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["best_of"] = "best_of"
    collection: Literal["posts", "videos"]
    metric: Literal["likes", "views"]
    target: int = Field(ge=0)

    @model_validator(mode="after")
    def check_pair(self):
        if (self.collection, self.metric) not in BEST_OF_PAIRS:
            raise ValueError(f"unsupported pair {self.collection}/{self.metric}")
        return self


class DateBefore(BaseModel):
    """Аккаунт создан не позже cutoff"""
    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["date_before"] = "date_before"
    cutoff: datetime

    @field_validator("cutoff", mode="before")
    @classmethod
    def parse_plain_date(cls, v):
        # '2025-12-31' -> полночь по UTC
        if isinstance(v, str) and len(v) == 10:
            return datetime.combine(date.fromisoformat(v), datetime.min.time(), tzinfo=timezone.utc)
        return v

    @field_validator("cutoff")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


RequirementSpec = Annotated[
    Union[CountTarget, BestOfCollection, DateBefore],
    Field(discriminator="kind"),
]

_requirement_adapter = TypeAdapter(RequirementSpec)


# Старые теги -> канонический вид
LEGACY_COUNT_TAGS = {
    "post_count": Metric.POSTS,
    "video_count": Metric.VIDEOS,
    "story_count": Metric.STORIES,
    "following_count": Metric.FOLLOWING,
    "follower_count": Metric.FOLLOWERS,
    "hashtag_usage": Metric.HASHTAGS,
}

LEGACY_BEST_OF_TAGS = {
    "post_likes": ("posts", "likes"),
    "video_views": ("videos", "views"),
}


def _from_legacy(raw: Dict[str, Any]) -> Dict[str, Any]:
    tag = raw.get("type")
    if tag in LEGACY_COUNT_TAGS:
        return {"kind": "count", "metric": LEGACY_COUNT_TAGS[tag].value, "target": raw.get("target")}
    if tag in LEGACY_BEST_OF_TAGS:
        collection, metric = LEGACY_BEST_OF_TAGS[tag]
        return {"kind": "best_of", "collection": collection, "metric": metric, "target": raw.get("target")}
    if tag == "join_date":
        return {"kind": "date_before", "cutoff": raw.get("before")}
    raise MalformedRequirementError(f"Unknown requirement type: {tag!r}")


def parse_requirement(raw: Any) -> RequirementSpec:
    """
    Разобрать требование ачивки

    Args:
        raw: dict, JSON-строка или уже готовая модель требования

    Returns:
        CountTarget | BestOfCollection | DateBefore

    Raises:
        MalformedRequirementError: неизвестный тип, нет обязательных полей, неверные значения
    """
    if isinstance(raw, (CountTarget, BestOfCollection, DateBefore)):
        return raw

    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise MalformedRequirementError(f"Requirement is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise MalformedRequirementError(f"Requirement must be an object, got {type(raw).__name__}")

    if "kind" not in raw:
        if "type" not in raw:
            raise MalformedRequirementError("Requirement has neither 'kind' nor 'type'")
        raw = _from_legacy(raw)

    try:
        return _requirement_adapter.validate_python(raw)
    except ValidationError as e:
        raise MalformedRequirementError(f"Invalid requirement {raw!r}: {e.error_count()} error(s)") from e


def requirement_to_json(spec: RequirementSpec) -> Dict[str, Any]:
    """Канонический JSON требования для хранения в базе"""
    return spec.model_dump(mode="json")
