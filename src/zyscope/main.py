"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from zyscope.catalog.router import router as catalog_router
from zyscope.config import Settings, get_settings
from zyscope.database import Store
from zyscope.gamification.router import router as gamification_router
from zyscope.health.router import router as health_router
from zyscope.leaderboard.router import router as leaderboard_router
from zyscope.middleware import setup_middleware
from zyscope.redis_client import close_redis, init_redis
from zyscope.reviews.router import router as reviews_router
from zyscope.users.router import router as users_router
from zyscope.visits.router import router as visits_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle.

    A store that cannot be opened aborts startup.
    """
    settings: Settings = app.state.settings
    store: Store = app.state.store
    await store.open()
    if settings.redis_url:
        await init_redis(settings.redis_url)
    logger.info("app_started", environment=settings.environment, version=settings.app_version)

    yield

    await store.close()
    await close_redis()


def create_app(settings: Settings | None = None, store: Store | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Zyscope API",
        description="Backend API for Zyscope, a gamified travel explorer",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store or Store(settings.database_url)

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(catalog_router)
    app.include_router(users_router)
    app.include_router(visits_router)
    app.include_router(reviews_router)
    app.include_router(leaderboard_router)
    app.include_router(gamification_router)

    return app


app = create_app()
