"""
Подключение к базе данных
"""
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from achievements_service.config import settings
import logging

logger = logging.getLogger(__name__)


def to_async_url(db_url: str) -> str:
    """Преобразовать DATABASE_URL для async драйверов"""
    if not db_url or db_url.strip() == "":
        raise ValueError("DATABASE_URL не установлен! Проверьте переменные окружения.")

    if db_url.startswith("sqlite://"):
        # SQLite для разработки и тестов
        return db_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    if db_url.startswith("postgresql://"):
        # PostgreSQL - добавляем asyncpg драйвер
        return db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if db_url.startswith(("sqlite+aiosqlite://", "postgresql+asyncpg://")):
        return db_url

    logger.warning(f"Неизвестный формат DATABASE_URL: {db_url[:30]}...")
    return db_url


db_url = to_async_url(settings.DATABASE_URL)

try:
    engine = create_async_engine(
        db_url,
        echo=settings.ENVIRONMENT == "development" and settings.LOG_LEVEL == "DEBUG",
        future=True
    )
    logger.info(f"Database engine создан успешно (URL: {db_url.split('@')[0]}@***)")
except Exception as e:
    logger.error(f"Ошибка создания database engine: {e}")
    raise

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# Base для моделей
Base = declarative_base()

async def get_db():
    """Dependency для получения сессии БД"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
