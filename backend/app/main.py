"""
Inventory API: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the app from a Settings object,
       wires its collaborators onto app.state, and registers middleware,
       exception handlers and routes.
Who:   uvicorn (`uvicorn app.main:app`, or the `inventory-api` script);
       tests call create_app() with their own Settings.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────────┐ ┌──────────────┐          │
    │  │   CORS   │→│  Request ID  │→│   Logging    │          │
    │  └──────────┘ └──────────────┘ └──────────────┘          │
    │                                                          │
    │  Routes:                                                 │
    │  /api/auth  /api/kategori  /api/produk  /api/stok        │
    │  /uploads/{filename}  /  /health                         │
    │                                                          │
    │  app.state:                                              │
    │  settings │ database │ token_service │ file_service      │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (startup aborts on an unsafe secret)
    3. Create the upload directory
    Shutdown:
    1. Dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, settings
from app.database import Database
from app.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    FileStorageError,
    InventoryError,
    NotFoundError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.routes import auth, files, health, kategori, produk, stok
from app.services.file_service import FileService
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Terjadi kesalahan server"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: 2024-06-10T09:12:44 [INFO] app.services.product_service: Product created: ...

    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging at the configured level
        2. Validate the signing secret; log and re-raise on failure so the
           server never starts accepting requests
        3. Create the upload directory
    Shutdown sequence:
        1. Dispose the database engine
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("Inventory API %s starting up...", __version__)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")
        raise

    upload_dir = Path(app_settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Upload directory: %s", upload_dir.resolve())

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)
    logger.info("API docs: http://%s:%d/docs", app_settings.host, app_settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Inventory API shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def current_request_id(request: Request) -> str:
    """
    The request's correlation ID.

    Catch-all handlers run outside RequestIDMiddleware, after its ContextVar
    has been reset, so request.state is the fallback.
    """
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Builds the standard error body: {error, message, details, request_id}."""
    rid = current_request_id(request)
    content = {"error": error, "message": message, "request_id": rid}
    if details:
        content["details"] = details
    headers = dict(headers or {})
    if rid:
        headers[REQUEST_ID_HEADER] = rid
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Maps exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        ValidationError, ConflictError → 400 (details returned)
        RequestValidationError         → 400 "Data tidak valid"
        AuthenticationError            → 401 + WWW-Authenticate: Bearer
        NotFoundError                  → 404
        HTTPException 404 (no route)   → 404 "Endpoint tidak ditemukan"
        DatabaseError, FileStorageError → 500 (context logged only)
        InventoryError (base)          → its status_code
        Exception (fallback)           → 500 "Terjadi kesalahan server"

    Responses never contain stack traces, SQL or file paths.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(request, 400, exc.error_code, exc.message, details=exc.context)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.info("[%s] Conflict: %s", request_id_var.get(""), exc.message)
        return error_response(request, 400, exc.error_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Body, form, path or query failed FastAPI's validation."""
        # "input" can hold the whole submitted body, passwords included
        errors = [
            {key: value for key, value in error.items() if key != "input"}
            for error in jsonable_encoder(exc.errors())
        ]
        logger.warning("[%s] Request validation failed: %d error(s)", request_id_var.get(""), len(errors))
        return error_response(
            request,
            400,
            ValidationError.error_code,
            "Data tidak valid",
            details={"errors": errors},
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return error_response(
            request,
            401,
            exc.error_code,
            exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, 404, exc.error_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Framework-raised HTTP errors: unknown routes, wrong methods."""
        if exc.status_code == 404:
            message = "Endpoint tidak ditemukan"
        elif exc.status_code == 405:
            message = "Metode tidak diizinkan"
        else:
            message = str(exc.detail)
        return error_response(
            request,
            exc.status_code,
            "not_found" if exc.status_code == 404 else "http_error",
            message,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(request, 500, exc.error_code, SERVER_ERROR_MESSAGE)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error(
            "[%s] File storage error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return error_response(request, 500, exc.error_code, exc.message)

    @app.exception_handler(InventoryError)
    async def handle_inventory_error(request: Request, exc: InventoryError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return error_response(request, exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all. The stack trace is logged server-side only."""
        logger.error(
            "[%s] Unexpected error: %s",
            current_request_id(request),
            str(exc),
            exc_info=True,
        )
        return error_response(request, 500, "server_error", SERVER_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the app from. Defaults to the
            process-wide `settings` loaded from the environment.

    Nothing here connects to the database; the engine opens connections
    lazily on the first request.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Inventory API",
        description=(
            "REST API for a small inventory: users, product categories, products "
            "with photos, and stock records. Protected endpoints take a bearer "
            "token from POST /api/auth/login."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.database = Database.from_settings(app_settings)
    app.state.token_service = TokenService.from_settings(app_settings)
    app.state.file_service = FileService.from_settings(app_settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: CORS → RequestID → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    origins = app_settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(kategori.router)
    app.include_router(produk.router)
    app.include_router(stok.router)
    app.include_router(files.router, prefix=app_settings.upload_url_path)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()


def run() -> None:
    """Entry point of the `inventory-api` console script."""
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
