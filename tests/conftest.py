"""Shared fixtures: per-test SQLite database, data factory, API client, fake loop."""

from datetime import datetime, timezone
from typing import Optional
import uuid

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from achievements_service.database import Base, get_db
from achievements_service.main import app
from achievements_service.models import (
    Achievement,
    AchievementCategory,
    AchievementRarity,
    Follow,
    Post,
    PostHashtag,
    PostLike,
    ShortVideo,
    Story,
    User,
)
from achievements_service.utils.auth import create_access_token


@pytest.fixture
async def engine(tmp_path):
    """File-backed SQLite so that separate sessions use separate connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


class DataFactory:
    """Creates users and the content the statistics snapshot counts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def user(self, username: Optional[str] = None, created_at: Optional[datetime] = None) -> User:
        user = User(username=username or f"user_{uuid.uuid4().hex[:8]}")
        if created_at is not None:
            user.created_at = created_at
        self.db.add(user)
        await self.db.commit()
        return user

    async def posts(self, author: User, count: int, likes: int = 0) -> list:
        posts = [Post(author_id=author.id, content=f"post {i}") for i in range(count)]
        self.db.add_all(posts)
        await self.db.flush()
        for post in posts:
            for _ in range(likes):
                liker = User(username=f"liker_{uuid.uuid4().hex[:8]}")
                self.db.add(liker)
                await self.db.flush()
                self.db.add(PostLike(post_id=post.id, user_id=liker.id))
        await self.db.commit()
        return posts

    async def hashtags(self, post: Post, *tags: str):
        self.db.add_all([PostHashtag(post_id=post.id, tag=tag) for tag in tags])
        await self.db.commit()

    async def videos(self, author: User, *views: int):
        self.db.add_all([ShortVideo(author_id=author.id, views=v) for v in views])
        await self.db.commit()

    async def stories(self, author: User, count: int):
        self.db.add_all([Story(author_id=author.id) for _ in range(count)])
        await self.db.commit()

    async def follow(self, follower: User, count: int):
        """follower subscribes to `count` new users"""
        for _ in range(count):
            target = User(username=f"target_{uuid.uuid4().hex[:8]}")
            self.db.add(target)
            await self.db.flush()
            self.db.add(Follow(follower_id=follower.id, following_id=target.id))
        await self.db.commit()

    async def followers(self, user: User, count: int):
        for _ in range(count):
            fan = User(username=f"fan_{uuid.uuid4().hex[:8]}")
            self.db.add(fan)
            await self.db.flush()
            self.db.add(Follow(follower_id=fan.id, following_id=user.id))
        await self.db.commit()

    async def achievement(
        self,
        key: str,
        requirement,
        points: int = 10,
        category: AchievementCategory = AchievementCategory.MILESTONE,
        is_active: bool = True,
    ) -> Achievement:
        achievement = Achievement(
            key=key,
            title=key.replace("_", " ").title(),
            description=f"{key} description",
            icon="🏆",
            category=category,
            rarity=AchievementRarity.COMMON,
            points=points,
            requirement=requirement,
            is_active=is_active,
        )
        self.db.add(achievement)
        await self.db.commit()
        return achievement


@pytest.fixture
def factory(db) -> DataFactory:
    return DataFactory(db)


@pytest.fixture
def recent_signup() -> datetime:
    """A join date after the early_bird cutoff."""
    return datetime(2026, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_user(factory, recent_signup) -> User:
    return await factory.user("test_user", created_at=recent_signup)


@pytest.fixture
def valid_jwt_token(test_user) -> str:
    return create_access_token({"sub": str(test_user.id)})


@pytest.fixture
async def client(session_factory):
    """API client over ASGI with get_db bound to the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class FakeTimerHandle:
    def __init__(self, when, callback, args):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeLoop:
    """Virtual clock with the time()/call_later() subset of an asyncio loop."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def time(self):
        return self.now

    def call_later(self, delay, callback, *args):
        handle = FakeTimerHandle(self.now + delay, callback, args)
        self.timers.append(handle)
        return handle

    def advance(self, seconds: float):
        target = self.now + seconds
        while True:
            due = [t for t in self.timers if not t.cancelled and t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self.timers.remove(timer)
            self.now = timer.when
            timer.callback(*timer.args)
        self.now = target

    @property
    def active_timers(self):
        return [t for t in self.timers if not t.cancelled]


@pytest.fixture
def fake_loop() -> FakeLoop:
    return FakeLoop()
