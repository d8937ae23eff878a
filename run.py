"""
Запуск API ачивок через uvicorn
"""
import uvicorn

from achievements_service.config import Settings, settings


def uvicorn_options(config: Settings = settings) -> dict:
    """Параметры uvicorn.run из настроек; autoreload только в development"""
    return {
        "host": config.HOST,
        "port": config.PORT,
        "reload": config.ENVIRONMENT == "development",
        "log_level": config.LOG_LEVEL.lower(),
    }


if __name__ == "__main__":
    uvicorn.run("achievements_service.main:app", **uvicorn_options())
