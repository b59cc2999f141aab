"""Milestone Tracker Backend: FastAPI application entry point."""

import signal
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

# configure_structlog MUST be called before all other app imports
# (structlog caches the processor chain on first use).
from app.core.logging import configure_structlog
from app.core.config import get_settings as _get_settings_early

_early_settings = _get_settings_early()
configure_structlog(
    log_level="DEBUG" if _early_settings.debug else _early_settings.log_level,
    json_logs=not _early_settings.debug,
    sql_log_level="INFO" if _early_settings.debug else _early_settings.sql_log_level,
)

import structlog

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from app.api.routes import api_router
from app.api.routes.uploads import UPLOADS_URL_PREFIX
from app.core.config import get_settings
from app.db import bootstrap_schema, close_db, init_db
from app.middleware.correlation import (
    setup_correlation_middleware,
    get_correlation_id,
)

logger = structlog.get_logger(__name__)


def _install_sigterm_flag(app: FastAPI) -> None:
    """Flip app.state.shutting_down on SIGTERM, then defer to the previous handler."""
    previous = signal.getsignal(signal.SIGTERM)

    def handle_sigterm(signum, frame):
        app.state.shutting_down = True
        logger.info("sigterm_received", action="health_check_503_draining_connections")
        if callable(previous):
            previous(signum, frame)

    try:
        signal.signal(signal.SIGTERM, handle_sigterm)
    except ValueError:
        # Not on the main thread (e.g. lifespan driven by TestClient)
        logger.debug("sigterm_handler_skipped")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    app.state.shutting_down = False
    _install_sigterm_flag(app)

    settings = get_settings()
    logger.info("startup_begin", app_name=settings.app_name, debug=settings.debug)

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    # Non-fatal: the server keeps starting and /api/ready reports what is missing
    try:
        await init_db()
        logger.info("db_pool_initialized", pool_size=settings.db_pool_size)
        seeded = await bootstrap_schema()
        logger.info("db_bootstrapped", seeded_stages=seeded)
    except Exception as e:
        logger.error("db_bootstrap_failed", error=str(e), error_type=type(e).__name__, exc_info=True)

    yield

    logger.info("shutdown_begin")
    await close_db()
    logger.info("shutdown_complete")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Global exception handler for HTTPException with debug_id tracking.

    Logs errors server-side with full context, returns {error, debug_id} to the client.
    """
    debug_id = str(uuid.uuid4())
    corr_id = get_correlation_id()

    logger.error(
        "http_exception",
        status_code=exc.status_code,
        debug_id=debug_id,
        correlation_id=corr_id,
        path=request.url.path,
        method=request.method,
        detail=exc.detail,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "debug_id": debug_id},
        headers=exc.headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 for malformed bodies/params, in the same {error, debug_id} shape plus field details."""
    debug_id = str(uuid.uuid4())

    logger.info(
        "request_validation_failed",
        debug_id=debug_id,
        correlation_id=get_correlation_id(),
        path=request.url.path,
        method=request.method,
        error_count=len(exc.errors()),
    )

    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid request",
            "details": jsonable_encoder(exc.errors()),
            "debug_id": debug_id,
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for unhandled errors with debug_id tracking.

    Logs full exception with traceback, returns generic 500 to client.
    """
    debug_id = str(uuid.uuid4())
    corr_id = get_correlation_id()

    logger.error(
        "unhandled_exception",
        debug_id=debug_id,
        correlation_id=corr_id,
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=True,
    )

    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "debug_id": debug_id},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project milestones grouped into stages, with illustration uploads",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation ID middleware (runs first on incoming requests)
    setup_correlation_middleware(app)

    app.exception_handler(HTTPException)(http_exception_handler)
    app.exception_handler(RequestValidationError)(validation_exception_handler)
    app.exception_handler(Exception)(generic_exception_handler)

    app.include_router(api_router, prefix="/api")

    # Directory is created in lifespan; check_dir=False lets the app be built before that
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=get_settings().port,
    )
