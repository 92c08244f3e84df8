"""
Tremu Backend — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn tremu.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Rate Limit  │→│ Req ID   │→│  Logging        │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /api/auth  /api/user  /api/boards  /api/columns    │
    │  /api/tasks  /health                                │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ 400 │ 401 │ 403 │ 404 │ 405 │ 409 │ DB→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, warn about insecure settings
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tremu import __version__
from tremu.config import settings
from tremu.database import dispose_engine
from tremu.exceptions import TremuError
from tremu.middleware.request_id import RequestIDMiddleware, request_id_var
from tremu.middleware.logging import RequestLoggingMiddleware
from tremu.middleware.rate_limit import RateLimitMiddleware
from tremu.routes import auth, boards, columns, health, tasks, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Tremu Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; development setups run with the defaults
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Tremu Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str, error: str | None = None) -> dict:
    body = {"message": message}
    if error:
        body["error"] = error
    return body


def _format_validation_errors(exc: RequestValidationError) -> tuple[str, str]:
    """
    Collapse Pydantic's error list into the envelope's message/error pair.

    Path parameters are row ids: non-numeric and out-of-range ids get fixed
    messages, with Pydantic's reason as the error.
    """
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        if err.get("loc", ("",))[0] == "path":
            if err.get("type", "").startswith("int_"):
                return "Invalid ID format, it must be a number", err.get("msg", "")
            return "Invalid ID, it is out of range", err.get("msg", "")
        field = ".".join(loc[-1:]) if loc else "body"
        msg = err.get("msg", "invalid value").removeprefix("Value error, ")
        details.append(f"{field}: {msg}")
    return "Invalid request: " + "; ".join(details), "validation_error"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the error envelope.

    Handler hierarchy:
        RequestValidationError  → 400 (FastAPI's 422 is not used)
        HTTPException           → its status (unknown route 404, wrong method 405)
        TremuError subclasses   → their ``status_code`` (400/401/403/404/409/500)
        SQLAlchemyError         → 500 with the driver message
        Exception (fallback)    → 500 with the exception message
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message, error = _format_validation_errors(exc)
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), message)
        return JSONResponse(status_code=400, content=_error_body(message, error))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(TremuError)
    async def handle_tremu_error(request: Request, exc: TremuError):
        rid = request_id_var.get("")
        error = exc.context.get("original_error")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        elif exc.status_code in (401, 403):
            logger.warning("[%s] %s", rid, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, error),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error("[%s] Database error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("A database error occurred", str(exc)),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body("An unexpected error occurred", str(exc) or type(exc).__name__),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Tremu API",
        description=(
            "Kanban task boards: boards, ordered columns and tasks, and invited "
            "board members. Authenticate with `Authorization: Bearer <token>` "
            "from POST /api/auth/login."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition:
    # RateLimit → RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(boards.router)
    app.include_router(columns.router)
    app.include_router(tasks.router)
    app.include_router(health.router)

    return app


app = create_app()
