"""
HTTP клиент API ачивок
"""
from typing import List, Optional
import asyncio
import logging

import httpx

from achievements_service.config import settings
from achievements_service.client.notification_scheduler import NotificationScheduler
from achievements_service.schemas.achievement import (
    AchievementResponse,
    CheckAchievementsResponse,
    UserAchievementsSummary,
)

logger = logging.getLogger(__name__)


class AchievementsClient:
    """
    Клиент API ачивок

    Проверка ачивок - best effort: ошибки логируются и превращаются
    в пустой список, пользователю они не показываются. Пропущенная
    разблокировка найдётся при следующей успешной проверке.
    """

    def __init__(
        self,
        token: str,
        base_url: str = settings.ACHIEVEMENTS_API_URL,
        timeout: float = settings.ACHIEVEMENTS_CHECK_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self.headers = {"Authorization": f"Bearer {token}"}
        self._background: set = set()

    async def check(self) -> List[AchievementResponse]:
        """Проверить ачивки; вернуть только новые разблокировки"""
        try:
            response = await self.http.post("/achievements/check", json={}, headers=self.headers)
            response.raise_for_status()
            data = CheckAchievementsResponse.model_validate(response.json())
        except Exception as e:
            logger.warning(f"⚠️ Проверка ачивок не удалась: {e}")
            return []
        return data.new_achievements

    def check_in_background(self, scheduler: NotificationScheduler) -> asyncio.Task:
        """
        Запустить проверку без ожидания (после поста, видео, истории)

        Новые ачивки передаются в очередь уведомлений.
        """
        async def _run():
            new_achievements = await self.check()
            scheduler.enqueue(new_achievements)

        task = asyncio.create_task(_run())
        # Держим ссылку, пока задача не завершится
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    async def get_my_achievements(self) -> UserAchievementsSummary:
        response = await self.http.get("/achievements/me", headers=self.headers)
        response.raise_for_status()
        return UserAchievementsSummary.model_validate(response.json())

    async def list_catalog(self) -> List[AchievementResponse]:
        response = await self.http.get("/achievements")
        response.raise_for_status()
        return [AchievementResponse.model_validate(item) for item in response.json()]

    async def aclose(self) -> None:
        for task in list(self._background):
            task.cancel()
        if self._owns_client:
            await self.http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()
