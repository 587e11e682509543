"""
SpacingCard — FastAPI Application Factory
===========================================

What:  Builds the spacing API: middleware, error rendering and routers.
How:   create_app() assembles a FastAPI instance; `app` is the module-level one.
Who:   Called by uvicorn (uvicorn spacingcard.main:app, or python -m spacingcard).
When:  Imported once by the server process.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────────────┐  │
    │  │ Req ID   │→│ Logging  │→│ GZip → CORS         │  │
    │  └──────────┘ └──────────┘ └─────────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌────────────┐ ┌──────────────┐   │
    │  │ /spacing     │ │ /examples  │ │ /health      │   │
    │  └──────────────┘ └────────────┘ └──────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ every error → 500 {"error": message}         │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Wait for the database to accept connections (tenacity backoff)
    3. Create tables if CREATE_TABLES is set
    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from spacingcard import __version__
from spacingcard.config import settings
from spacingcard.database import create_tables, dispose_engine, wait_for_database
from spacingcard.exceptions import (
    DatabaseError,
    MissingParameterError,
    NotFoundError,
    SpacingCardError,
)
from spacingcard.middleware.logging import RequestLoggingMiddleware
from spacingcard.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from spacingcard.routes import examples, health, spacing

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    log_level = level or settings.log_level
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Third-party libraries log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging → wait for database → create tables.
    Shutdown: dispose the engine.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("SpacingCard API starting up...")

    await wait_for_database()
    if settings.create_tables:
        await create_tables()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("SpacingCard API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(message: str) -> JSONResponse:
    rid = request_id_var.get("")
    return JSONResponse(
        status_code=500,
        content={"error": message, "request_id": rid},
        headers={REQUEST_ID_HEADER: rid} if rid else None,
    )


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Handler hierarchy (all respond 500 {"error": message}):
        MissingParameterError   → logged at WARNING
        NotFoundError           → logged at WARNING
        RequestValidationError  → logged at WARNING (bad PATCH body)
        DatabaseError           → logged at ERROR with context
        SpacingCardError (base) → logged at ERROR
        Exception (fallback)    → logged at ERROR with stack trace
    """

    @app.exception_handler(MissingParameterError)
    async def handle_missing_parameter(request: Request, exc: MissingParameterError):
        logger.warning("[%s] Missing parameter: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.warning("[%s] Not found: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.warning("[%s] Invalid request body: %s", request_id_var.get(""), message)
        return _error_response(message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error_response(exc.message)

    @app.exception_handler(SpacingCardError)
    async def handle_app_error(request: Request, exc: SpacingCardError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return _error_response(exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(str(exc) or type(exc).__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Assemble the spacing API.

    Returns a new instance on every call; the server imports `app`.
    """
    app = FastAPI(
        title="SpacingCard API",
        description="Read and edit margin/padding spacing of design-tool components.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # added CORS → GZip → Logging → RequestID, runs RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(spacing.router)
    app.include_router(examples.router)
    app.include_router(health.router)

    return app


# uvicorn expects `spacingcard.main:app` to be importable
app = create_app()
