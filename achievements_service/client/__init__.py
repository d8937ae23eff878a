"""
Клиентская часть: вызов проверки ачивок и очередь уведомлений
"""
from achievements_service.client.achievements_client import AchievementsClient
from achievements_service.client.notification_scheduler import (
    NotificationScheduler,
    NotificationState,
    ScheduledNotification,
)

__all__ = [
    "AchievementsClient",
    "NotificationScheduler",
    "NotificationState",
    "ScheduledNotification",
]
