"""
Album Store — FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       the lifespan connects whatever store handles were not injected.
Who:   uvicorn (`uvicorn albumstore.main:app`), the `albumstore` console
       script (run()), and the test suite (create_app with fakes).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:      /albums, /albums/{id}, /health        │
    │                                                     │
    │  Exception Handlers (body: {"error": "..."}):       │
    │    bad id / body → 400 │ NotFound → 404 │ DB → 500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup (any failure raises StartupError and the server exits):
    1. Configure logging
    2. Connect MongoDB and ping it
    3. Connect Redis and ping it (only when CACHE_ENABLED)
    4. Copy album titles into the cache (only when a cache is present)

    Shutdown:
    1. Close the Redis client, then the MongoDB client (only those opened here)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from albumstore import __version__
from albumstore.cache import AlbumCache, connect_cache
from albumstore.config import Settings, settings
from albumstore.database import connect_persistence, dispose_client
from albumstore.exceptions import (
    AlbumStoreError,
    DatabaseError,
    NotFoundError,
    StartupError,
    ValidationError,
)
from albumstore.middleware.logging import RequestLoggingMiddleware
from albumstore.middleware.request_id import RequestIDMiddleware, request_id_var
from albumstore.repository import AlbumRepository
from albumstore.routes import albums, health
from albumstore.services.album_service import AlbumService
from albumstore.services.cache_sync import sync_album_titles

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] albumstore.access: GET /albums 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect the stores, run the cache sync, and release what was opened here.

    Handles injected through create_app() are used as-is and never closed
    by the lifespan.
    """
    state = app.state
    cfg: Settings = state.settings
    setup_logging(cfg.log_level)
    logger.info("Album Store %s starting up...", __version__)

    mongo_client = None
    owned_cache: Optional[AlbumCache] = None
    try:
        try:
            if state.repository is None:
                mongo_client, state.repository = await connect_persistence(cfg)
            if state.cache is None and cfg.cache_enabled:
                owned_cache = state.cache = await connect_cache(cfg)
            if state.cache is not None:
                await sync_album_titles(state.repository, state.cache)
        except StartupError as e:
            logger.critical("Startup aborted: %s", e.message)
            raise

        state.album_service = AlbumService(state.repository)
        logger.info("Server ready at http://%s:%d", cfg.host, cfg.port)

        yield

        logger.info("Album Store shutting down...")
    finally:
        if owned_cache is not None:
            await owned_cache.close()
        if mongo_client is not None:
            await dispose_client(mongo_client)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    """Renders the first decode error, e.g. `path.album_id: Input should be a valid integer`."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes. Every error body is `{"error": "<message>"}`.

    Handler hierarchy:
        RequestValidationError  → 400 (malformed JSON, bad field type, bad id)
        ValidationError         → 400
        NotFoundError           → 404
        DatabaseError           → 500 (raw text only with EXPOSE_BACKEND_ERRORS)
        HTTPException           → its own status (unknown route, wrong method)
        AlbumStoreError         → 500
        Exception (fallback)    → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning("[%s] Bad request: %s", request_id_var.get(""), message)
        return _error(400, message)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        message = exc.message
        if request.app.state.settings.expose_backend_errors and exc.original_error:
            message = exc.original_error
        return _error(500, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(AlbumStoreError)
    async def handle_album_store_error(request: Request, exc: AlbumStoreError):
        logger.error("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error(500, "An unexpected error occurred.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    repository: Optional[AlbumRepository] = None,
    cache: Optional[AlbumCache] = None,
    app_settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        repository: Album repository to use instead of connecting to MongoDB.
        cache: Cache to use instead of connecting to Redis. When given, the
            startup sync runs against it regardless of CACHE_ENABLED.
        app_settings: Settings to use instead of the module singleton.

    When a repository is injected the AlbumService is built immediately, so
    the app can serve requests even if the lifespan never runs (as under
    httpx's ASGITransport).
    """
    cfg = app_settings or settings

    app = FastAPI(
        title="Album Store API",
        description="CRUD over albums stored in MongoDB, with an optional Redis title cache.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = cfg
    app.state.repository = repository
    app.state.cache = cache
    app.state.album_service = AlbumService(repository) if repository is not None else None

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(albums.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entrypoint: serve the app on the configured host and port."""
    uvicorn.run(
        "albumstore.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `albumstore.main:app` to be importable
app = create_app()
