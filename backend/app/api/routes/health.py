import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from app.db.base import get_engine
from app.db.models.stage import Stage

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Liveness check.

    Returns 503 during graceful shutdown so the load balancer stops routing traffic.
    """
    if getattr(request.app.state, "shutting_down", False):
        return JSONResponse(
            status_code=503,
            content={"status": "shutting_down", "service": "milestone-tracker"},
        )
    return {"status": "healthy", "service": "milestone-tracker"}


@router.get("/ready")
async def readiness_check():
    """Readiness check.

    The server keeps listening when the startup bootstrap fails, so this
    reports the database and the schema separately.
    """
    checks = {"database": False, "schema": False}

    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
            checks["database"] = True
            await conn.execute(select(func.count(Stage.id)))
            checks["schema"] = True
    except (RuntimeError, SQLAlchemyError) as e:
        logger.error("readiness_check_failed", checks=checks, error=str(e), error_type=type(e).__name__)

    all_healthy = all(checks.values())
    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content={"status": "ready" if all_healthy else "degraded", "checks": checks},
    )
