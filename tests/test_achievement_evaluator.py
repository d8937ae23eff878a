"""Tests for the pure requirement evaluator."""

from datetime import datetime, timezone

import pytest

from achievements_service.services.achievement_evaluator import UserStatSnapshot, evaluate
from achievements_service.services.achievement_requirements import CountTarget, DateBefore, Metric


def make_stats(**overrides) -> UserStatSnapshot:
    values = dict(
        posts=3,
        videos=1,
        stories=0,
        following=9,
        followers=120,
        hashtags=4,
        created_at=datetime(2025, 5, 1, tzinfo=timezone.utc),
        max_post_likes=42,
        max_video_views=1500,
    )
    values.update(overrides)
    return UserStatSnapshot(**values)


class TestCountTarget:
    def test_below_target_reports_raw_count(self):
        result = evaluate(make_stats(), {"type": "following_count", "target": 10})

        assert result.progress == 9
        assert result.satisfied is False
        assert result.warning is None

    def test_target_reached(self):
        result = evaluate(make_stats(following=10), CountTarget(metric=Metric.FOLLOWING, target=10))

        assert result.progress == 10
        assert result.satisfied is True

    def test_progress_can_exceed_target(self):
        result = evaluate(make_stats(posts=75), {"type": "post_count", "target": 50})

        assert result.progress == 75
        assert result.satisfied is True


class TestBestOfCollection:
    def test_uses_precomputed_post_likes_maximum(self):
        result = evaluate(make_stats(), {"type": "post_likes", "target": 100})

        assert result.progress == 42
        assert result.satisfied is False

    def test_uses_precomputed_video_views_maximum(self):
        result = evaluate(make_stats(), {"type": "video_views", "target": 1000})

        assert result.progress == 1500
        assert result.satisfied is True


class TestDateBefore:
    def test_joined_before_cutoff(self):
        result = evaluate(make_stats(), {"type": "join_date", "before": "2025-12-31"})

        assert result.satisfied is True
        assert result.progress == 1

    def test_joined_after_cutoff(self):
        stats = make_stats(created_at=datetime(2026, 1, 2, tzinfo=timezone.utc))

        result = evaluate(stats, {"type": "join_date", "before": "2025-12-31"})

        assert result.satisfied is False
        assert result.progress == 0

    def test_cutoff_is_inclusive(self):
        cutoff = datetime(2025, 12, 31, tzinfo=timezone.utc)

        result = evaluate(make_stats(created_at=cutoff), DateBefore(cutoff=cutoff))

        assert result.satisfied is True

    def test_naive_created_at_is_treated_as_utc(self):
        stats = make_stats(created_at=datetime(2025, 1, 1))

        result = evaluate(stats, {"type": "join_date", "before": "2025-12-31"})

        assert result.satisfied is True


class TestMalformed:
    @pytest.mark.parametrize(
        "requirement",
        [
            {"type": "hashtag_storm", "target": 1},
            {"kind": "count"},
            "{broken",
            42,
        ],
    )
    def test_degrades_to_not_satisfied(self, requirement, caplog):
        result = evaluate(make_stats(), requirement)

        assert result.progress == 0
        assert result.satisfied is False
        assert result.warning
        assert any(record.levelname == "WARNING" for record in caplog.records)
