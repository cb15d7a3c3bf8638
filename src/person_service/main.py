"""Person service - FastAPI application.

This module creates and configures the FastAPI application.
"""

import traceback
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.health import router as health_router
from .api.key_value import router as key_value_router
from .api.person_attributes import router as person_attributes_router
from .core import error_codes
from .core.config import get_settings_instance
from .core.database import check_db_connection, close_db, init_db
from .core.encryption import get_encryption_context
from .core.exceptions import PersonServiceException
from .core.logging import get_logger, setup_logging
from .core.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimingMiddleware,
    UnhandledExceptionMiddleware,
)
from .core.response import ServiceResponse

logger = get_logger(__name__)
settings = get_settings_instance()


def generate_error_id() -> str:
    """Generate a unique error ID for tracking."""
    return f"ERR-{uuid.uuid4().hex[:8].upper()}"


def get_request_context(request: Request) -> dict[str, Any]:
    """Extract relevant context from request for error logging."""
    return {
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "user_agent": request.headers.get("user-agent"),
        "client_host": request.client.host if request.client else None,
        "request_id": getattr(request.state, "request_id", None),
        "api_key_slot": getattr(request.state, "api_key_slot", None),
    }


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an uncaught exception with an error id and answer a bare 500."""
    error_id = generate_error_id()
    include_traceback = settings.debug or settings.log_level == "DEBUG"
    extra = {
        "error_id": error_id,
        "exception_type": type(exc).__name__,
        "exception_message": str(exc),
        "request_context": get_request_context(request),
    }
    if include_traceback:
        extra["traceback"] = traceback.format_exception(exc)
    logger.error("Unhandled exception", extra=extra)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error", "errorCode": error_codes.INTERNAL_SERVER_ERROR},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging()

    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Version: {settings.version}")
    logger.info(f"Environment: {settings.environment}")

    get_encryption_context()

    # The service still starts when the database is down so /health can report it
    try:
        await init_db()
        await check_db_connection()
        logger.info("Database connection established")
    except Exception as e:
        logger.error(
            "Database ping failed",
            extra={"error_code": error_codes.DB_PING_FAILED, "error": str(e)},
        )

    logger.info(f"Listening on {settings.api_host}:{settings.api_port}")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(
            "Error closing database connections",
            extra={"error_code": error_codes.DB_FAILED_SHUTDOWN, "error": str(e)},
        )
    logger.info(f"{settings.app_name} shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Key-value and encrypted person-attribute API",
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    setup_middleware(app)
    setup_exception_handlers(app)
    setup_routes(app)

    logger.debug("FastAPI application created")
    return app


def setup_middleware(app: FastAPI) -> None:
    """Register middleware; the last one added runs first."""
    app.add_middleware(UnhandledExceptionMiddleware, handler=general_exception_handler)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers that render every error as ``{"message", "errorCode"}``.

    Client errors are logged at warning level; server errors get an error id
    that is logged alongside the request context.
    """

    @app.exception_handler(PersonServiceException)
    async def person_service_exception_handler(request: Request, exc: PersonServiceException):
        if exc.status_code >= 500:
            logger.error(
                "Server error",
                extra={
                    "error_id": generate_error_id(),
                    "error_code": exc.error_code,
                    "error_message": exc.message,
                    "request_context": get_request_context(request),
                },
            )
        else:
            logger.warning(
                "Client error",
                extra={
                    "error_code": exc.error_code,
                    "error_message": exc.message,
                    "request_context": get_request_context(request),
                },
            )
        return ServiceResponse.error(exc.message, exc.error_code, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error(
                "HTTP server error",
                extra={"error_id": generate_error_id(), "detail": exc.detail, "request_context": get_request_context(request)},
            )
        else:
            logger.warning(
                "HTTP client error",
                extra={"status_code": exc.status_code, "detail": exc.detail, "request_context": get_request_context(request)},
            )
        return ServiceResponse.error(
            str(exc.detail),
            f"HTTP_{exc.status_code}",
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None) or None,
        )

    app.add_exception_handler(Exception, general_exception_handler)


def setup_routes(app: FastAPI) -> None:
    """Configure application routes."""
    app.include_router(health_router)
    app.include_router(key_value_router)
    app.include_router(person_attributes_router)


# Ensure logging is configured as early as possible (before app instantiation)
# The lifespan will call setup_logging() again but it's guarded to no-op on second call
setup_logging()

# Create application instance
app = create_app()
