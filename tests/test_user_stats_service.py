"""Tests for the single-query statistics snapshot."""

import uuid
from datetime import datetime, timezone

import pytest

from achievements_service.services.achievement_errors import StatisticsUnavailableError
from achievements_service.services.user_stats_service import UserStatsService


class TestGetSnapshot:
    async def test_empty_user(self, db, test_user):
        stats = await UserStatsService.get_snapshot(db, test_user.id)

        assert (stats.posts, stats.videos, stats.stories) == (0, 0, 0)
        assert (stats.following, stats.followers, stats.hashtags) == (0, 0, 0)
        assert (stats.max_post_likes, stats.max_video_views) == (0, 0)
        assert stats.created_at.replace(tzinfo=timezone.utc) == datetime(2026, 3, 1, tzinfo=timezone.utc)

    async def test_counts_and_maxima(self, db, factory, test_user):
        posts = await factory.posts(test_user, 2, likes=1)
        await factory.posts(test_user, 1, likes=4)
        await factory.hashtags(posts[0], "python", "fastapi")
        await factory.hashtags(posts[1], "python", "sqlalchemy")
        await factory.videos(test_user, 120, 30)
        await factory.stories(test_user, 3)
        await factory.follow(test_user, 2)
        await factory.followers(test_user, 5)

        stats = await UserStatsService.get_snapshot(db, test_user.id)

        assert stats.posts == 3
        assert stats.videos == 2
        assert stats.stories == 3
        assert stats.following == 2
        assert stats.followers == 5
        assert stats.hashtags == 3
        assert stats.max_post_likes == 4
        assert stats.max_video_views == 120

    async def test_other_users_content_is_not_counted(self, db, factory, test_user):
        other = await factory.user("someone_else")
        await factory.posts(other, 4, likes=2)
        await factory.videos(other, 500)

        stats = await UserStatsService.get_snapshot(db, test_user.id)

        assert stats.posts == 0
        assert stats.max_post_likes == 0
        assert stats.max_video_views == 0

    async def test_unknown_user(self, db):
        with pytest.raises(StatisticsUnavailableError):
            await UserStatsService.get_snapshot(db, uuid.uuid4())
