"""Tests for requirement parsing (canonical and legacy stored shapes)."""

from datetime import datetime, timezone

import pytest

from achievements_service.services.achievement_errors import MalformedRequirementError
from achievements_service.services.achievement_requirements import (
    BestOfCollection,
    CountTarget,
    DateBefore,
    Metric,
    parse_requirement,
    requirement_to_json,
)


class TestLegacyRequirements:
    """Requirements stored as {"type": ..., "target": ...}."""

    @pytest.mark.parametrize(
        "tag, metric",
        [
            ("post_count", Metric.POSTS),
            ("video_count", Metric.VIDEOS),
            ("story_count", Metric.STORIES),
            ("following_count", Metric.FOLLOWING),
            ("follower_count", Metric.FOLLOWERS),
            ("hashtag_usage", Metric.HASHTAGS),
        ],
    )
    def test_count_tags(self, tag, metric):
        spec = parse_requirement({"type": tag, "target": 10})

        assert spec == CountTarget(metric=metric, target=10)

    def test_post_likes_is_best_of_posts(self):
        spec = parse_requirement({"type": "post_likes", "target": 100})

        assert isinstance(spec, BestOfCollection)
        assert (spec.collection, spec.metric, spec.target) == ("posts", "likes", 100)

    def test_video_views_is_best_of_videos(self):
        spec = parse_requirement('{"type": "video_views", "target": 1000}')

        assert isinstance(spec, BestOfCollection)
        assert (spec.collection, spec.metric) == ("videos", "views")

    def test_join_date_plain_date_is_midnight_utc(self):
        spec = parse_requirement({"type": "join_date", "before": "2025-12-31"})

        assert isinstance(spec, DateBefore)
        assert spec.cutoff == datetime(2025, 12, 31, tzinfo=timezone.utc)


class TestCanonicalRequirements:
    def test_roundtrip_through_stored_json(self):
        spec = CountTarget(metric=Metric.FOLLOWERS, target=1000)

        stored = requirement_to_json(spec)

        assert stored == {"kind": "count", "metric": "followers", "target": 1000}
        assert parse_requirement(stored) == spec

    def test_naive_cutoff_is_treated_as_utc(self):
        spec = parse_requirement({"kind": "date_before", "cutoff": "2025-06-01T12:00:00"})

        assert spec.cutoff.tzinfo is not None
        assert spec.cutoff == datetime(2025, 6, 1, 12, tzinfo=timezone.utc)

    def test_already_parsed_spec_is_returned_as_is(self):
        spec = BestOfCollection(collection="posts", metric="likes", target=5)

        assert parse_requirement(spec) is spec


class TestMalformedRequirements:
    @pytest.mark.parametrize(
        "raw",
        [
            {"type": "mystery", "target": 3},
            {"target": 3},
            {"type": "post_count"},
            {"type": "post_count", "target": -1},
            {"kind": "count", "metric": "likes", "target": 1},
            {"kind": "best_of", "collection": "posts", "metric": "views", "target": 1},
            {"kind": "count", "metric": "posts", "target": 1, "extra": True},
            "not json",
            "[1, 2]",
            None,
        ],
    )
    def test_raises_malformed(self, raw):
        with pytest.raises(MalformedRequirementError):
            parse_requirement(raw)

    def test_malformed_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_requirement({"type": "hashtag_storm"})
