"""
Сервис для статистики пользователей
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func
from uuid import UUID

from achievements_service.models.user import User
from achievements_service.models.content import Post, PostLike, PostHashtag, ShortVideo, Story, Follow
from achievements_service.services.achievement_errors import StatisticsUnavailableError
from achievements_service.services.achievement_evaluator import UserStatSnapshot


class UserStatsService:
    """Сервис для получения снимка статистики пользователя"""

    @staticmethod
    def _snapshot_query(user_id: UUID):
        """
        Один SELECT со скалярными подзапросами

        Максимумы лайков и просмотров считаются здесь один раз на проход,
        по ним потом проверяются и выполнение требования, и прогресс.
        """
        posts = select(func.count(Post.id)).where(Post.author_id == user_id).scalar_subquery()
        videos = select(func.count(ShortVideo.id)).where(ShortVideo.author_id == user_id).scalar_subquery()
        stories = select(func.count(Story.id)).where(Story.author_id == user_id).scalar_subquery()
        following = select(func.count(Follow.id)).where(Follow.follower_id == user_id).scalar_subquery()
        followers = select(func.count(Follow.id)).where(Follow.following_id == user_id).scalar_subquery()

        hashtags = select(
            func.count(func.distinct(PostHashtag.tag))
        ).join(
            Post, Post.id == PostHashtag.post_id
        ).where(
            Post.author_id == user_id
        ).scalar_subquery()

        likes_per_post = select(
            func.count(PostLike.id).label("likes")
        ).join(
            Post, Post.id == PostLike.post_id
        ).where(
            Post.author_id == user_id
        ).group_by(
            PostLike.post_id
        ).subquery()
        max_post_likes = select(func.max(likes_per_post.c.likes)).scalar_subquery()

        max_video_views = select(func.max(ShortVideo.views)).where(ShortVideo.author_id == user_id).scalar_subquery()

        return select(
            User.created_at,
            posts.label("posts"),
            videos.label("videos"),
            stories.label("stories"),
            following.label("following"),
            followers.label("followers"),
            hashtags.label("hashtags"),
            max_post_likes.label("max_post_likes"),
            max_video_views.label("max_video_views"),
        ).where(User.id == user_id)

    @staticmethod
    async def get_snapshot(db: AsyncSession, user_id: UUID) -> UserStatSnapshot:
        """
        Получить снимок статистики пользователя

        Raises:
            StatisticsUnavailableError: пользователь не найден или запрос упал
        """
        try:
            result = await db.execute(UserStatsService._snapshot_query(user_id))
            row = result.one_or_none()
        except SQLAlchemyError as e:
            raise StatisticsUnavailableError(f"Failed to load statistics for user {user_id}: {e}") from e

        if row is None:
            raise StatisticsUnavailableError(f"User {user_id} not found")

        return UserStatSnapshot(
            posts=row.posts or 0,
            videos=row.videos or 0,
            stories=row.stories or 0,
            following=row.following or 0,
            followers=row.followers or 0,
            hashtags=row.hashtags or 0,
            created_at=row.created_at,
            max_post_likes=row.max_post_likes or 0,
            max_video_views=row.max_video_views or 0,
        )
