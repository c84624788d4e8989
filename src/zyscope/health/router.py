"""Health, readiness, and version endpoints."""

from fastapi import APIRouter, Request
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from zyscope.config import get_settings
from zyscope.database import Store
from zyscope.redis_client import get_redis

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check: returns 200 if the process is alive."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness(request: Request) -> dict[str, object]:
    """Readiness check: checks DB and, when configured, Redis connectivity."""
    checks: dict[str, object] = {}

    store: Store = request.app.state.store
    if not store.is_open:
        checks["database"] = "error: not opened"
    else:
        try:
            async with store.session() as db:
                result = await db.execute(text("SELECT 1"))
                result.scalar()
            checks["database"] = "ok"
        except SQLAlchemyError as exc:
            checks["database"] = f"error: {exc}"

    try:
        redis = get_redis()
    except RuntimeError:
        checks["redis"] = "disabled"
    else:
        try:
            await redis.ping()
            checks["redis"] = "ok"
        except RedisError as exc:
            checks["redis"] = f"error: {exc}"

    all_ok = all(v in ("ok", "disabled") for v in checks.values())
    return {"status": "ready" if all_ok else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    """Return API version and environment."""
    settings = get_settings()
    return {
        "version": settings.app_version,
        "environment": settings.environment,
    }
