"""
FastAPI приложение
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from achievements_service.config import settings
from achievements_service.api import achievements

# Настройка логирования
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Achievements API",
    description="API ачивок: каталог, прогресс пользователя и проверка разблокировок",
    version="0.1.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключение роутеров
app.include_router(achievements.router, prefix=settings.API_V1_PREFIX)

@app.get("/")
async def root():
    """Корневой endpoint"""
    return {
        "message": "Achievements API",
        "version": "0.1.0",
        "docs": "/docs",
        "api_prefix": settings.API_V1_PREFIX
    }

@app.get("/health")
async def health():
    """Health check"""
    return {"status": "ok"}


@app.on_event("startup")
async def startup_event():
    """Выполняется при запуске приложения"""
    logger.info("Achievements API starting up...")
    logger.info(f"🌐 CORS allowed origins: {settings.CORS_ORIGINS}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    if not settings.SEED_ACHIEVEMENTS_ON_STARTUP:
        return

    # Засев каталога ачивок по умолчанию
    try:
        from achievements_service.database import AsyncSessionLocal
        from achievements_service.services.achievement_catalog import seed_default_achievements

        async with AsyncSessionLocal() as db:
            created = await seed_default_achievements(db)
        if created:
            logger.info(f"✅ Каталог ачивок засеян ({created} шт.)")
    except Exception as e:
        logger.warning(f"⚠️ Не удалось засеять каталог ачивок: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    """Выполняется при остановке приложения"""
    logger.info("Achievements API shutting down...")
