"""
Конфигурация приложения
"""
from pydantic_settings import BaseSettings
from pydantic import model_validator
from typing import List, Any
import os


DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
]


class Settings(BaseSettings):
    """Настройки приложения"""

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./achievements.db"
    )

    # Сервер (run.py)
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # API
    API_V1_PREFIX: str = "/api/v1"
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440

    # CORS - используем model_validator для перехвата до парсинга
    CORS_ORIGINS: List[str] = []

    @model_validator(mode='before')
    @classmethod
    def parse_cors_origins_before(cls, data: Any) -> Any:
        """Парсинг CORS_ORIGINS из строки с запятыми до парсинга Pydantic"""
        if isinstance(data, dict):
            if 'CORS_ORIGINS' in data and isinstance(data['CORS_ORIGINS'], str):
                cors_str = data['CORS_ORIGINS'].strip()
                if cors_str:
                    data['CORS_ORIGINS'] = [origin.strip() for origin in cors_str.split(",") if origin.strip()]
                else:
                    data['CORS_ORIGINS'] = list(DEFAULT_CORS_ORIGINS)
            elif 'CORS_ORIGINS' not in data:
                data['CORS_ORIGINS'] = list(DEFAULT_CORS_ORIGINS)
        return data

    # Ачивки: засеять каталог по умолчанию при старте
    SEED_ACHIEVEMENTS_ON_STARTUP: bool = True

    # Уведомления об ачивках на клиенте (миллисекунды)
    ACHIEVEMENT_NOTIFICATION_STAGGER_MS: int = 6000
    ACHIEVEMENT_NOTIFICATION_DISPLAY_MS: int = 5000
    ACHIEVEMENT_NOTIFICATION_EXIT_MS: int = 300

    # Клиент API ачивок
    ACHIEVEMENTS_API_URL: str = os.getenv("ACHIEVEMENTS_API_URL", "http://localhost:8000/api/v1")
    ACHIEVEMENTS_CHECK_TIMEOUT: float = 10.0

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
