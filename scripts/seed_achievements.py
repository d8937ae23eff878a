"""
Скрипт для создания ачивок по умолчанию
Запускается при первом запуске системы или вручную
"""
import asyncio
import sys
from pathlib import Path

# Добавляем путь к проекту
sys.path.insert(0, str(Path(__file__).parent.parent))

from achievements_service.database import AsyncSessionLocal, Base, engine
from achievements_service.services.achievement_catalog import seed_default_achievements
import achievements_service.models  # noqa: F401
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main(create_tables: bool = False):
    """Засеять каталог ачивок"""
    if create_tables:
        # Только для локальной разработки, в production - alembic upgrade head
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("✅ Таблицы созданы")

    async with AsyncSessionLocal() as db:
        created = await seed_default_achievements(db)

    logger.info(f"✅ Готово, создано ачивок: {created}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main(create_tables="--create-tables" in sys.argv))
