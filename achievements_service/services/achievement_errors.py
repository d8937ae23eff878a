"""
Исключения подсистемы ачивок
"""


class AchievementError(Exception):
    """Базовое исключение подсистемы ачивок"""


class MalformedRequirementError(AchievementError, ValueError):
    """Требование ачивки не удалось разобрать (неизвестный тип, нет полей и т.п.)"""


class StatisticsUnavailableError(AchievementError):
    """Не удалось получить снимок статистики пользователя"""
