"""Tests for the HTTP client of the achievements API."""

import asyncio
import uuid

import httpx

from achievements_service.client.achievements_client import AchievementsClient
from achievements_service.client.notification_scheduler import NotificationScheduler


def achievement_payload(key: str) -> dict:
    return {
        "id": str(uuid.uuid4()),
        "key": key,
        "title": key.title(),
        "description": None,
        "icon": "🏆",
        "category": "milestone",
        "rarity": "common",
        "points": 10,
        "requirement": {"kind": "count", "metric": "posts", "target": 1},
        "isActive": True,
    }


def make_client(handler) -> AchievementsClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api.test")
    return AchievementsClient(token="secret", http_client=http)


class TestCheck:
    async def test_returns_new_achievements(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json={"newAchievements": [achievement_payload("first_post")]})

        client = make_client(handler)
        result = await client.check()

        assert [a.key for a in result] == ["first_post"]
        assert seen == {"path": "/achievements/check", "auth": "Bearer secret"}
        await client.http.aclose()

    async def test_server_error_becomes_empty_list(self, caplog):
        client = make_client(lambda request: httpx.Response(500))

        assert await client.check() == []
        assert "Проверка ачивок не удалась" in caplog.text
        await client.http.aclose()

    async def test_network_error_becomes_empty_list(self):
        def handler(request):
            raise httpx.ConnectError("connection refused")

        client = make_client(handler)

        assert await client.check() == []
        await client.http.aclose()


class TestCheckInBackground:
    async def test_results_go_to_the_scheduler(self):
        client = make_client(
            lambda request: httpx.Response(
                200,
                json={"newAchievements": [achievement_payload("first_post"), achievement_payload("video_star")]},
            )
        )
        shown = []
        scheduler = NotificationScheduler(on_show=lambda a: shown.append(a.key))

        await client.check_in_background(scheduler)

        assert shown == ["first_post"]
        assert scheduler.pending == 1
        scheduler.close()
        await client.http.aclose()

    async def test_failure_enqueues_nothing(self):
        client = make_client(lambda request: httpx.Response(503))
        scheduler = NotificationScheduler()

        task = client.check_in_background(scheduler)
        await asyncio.wait_for(task, timeout=1)

        assert scheduler.pending == 0
        assert scheduler.state.value == "idle"
        await client.http.aclose()


class TestReads:
    async def test_list_catalog(self):
        client = make_client(lambda request: httpx.Response(200, json=[achievement_payload("early_bird")]))

        catalog = await client.list_catalog()

        assert catalog[0].key == "early_bird"
        assert catalog[0].requirement["kind"] == "count"
        await client.http.aclose()

    async def test_get_my_achievements(self):
        payload = {
            "achievements": [
                {
                    "id": str(uuid.uuid4()),
                    "userId": str(uuid.uuid4()),
                    "achievementId": str(uuid.uuid4()),
                    "achievement": achievement_payload("first_post"),
                    "progress": 1,
                    "isCompleted": True,
                    "unlockedAt": "2026-03-02T10:00:00Z",
                }
            ],
            "totalPoints": 10,
            "completedCount": 1,
            "totalCount": 1,
        }
        client = make_client(lambda request: httpx.Response(200, json=payload))

        summary = await client.get_my_achievements()

        assert summary.total_points == 10
        assert summary.achievements[0].is_completed is True
        await client.http.aclose()
