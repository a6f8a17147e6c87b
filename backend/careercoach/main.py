"""
FastAPI Application Entry Point for the AI Career Coach backend

This module creates and configures the FastAPI application instance with all
middleware, routes, exception handlers, and lifecycle events.

Features:
- CORS middleware for frontend integration
- Rate limiting (slowapi)
- Request id and timing middleware
- Database connection management
- Gemini client and structured generator on app state
- Weekly insight refresh scheduling (APScheduler)
- Uniform error envelope: {"error": {"type", "message", "path"}}
"""

import functools
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException

from careercoach.api import API_DESCRIPTION, API_TITLE, API_VERSION, ERROR_RESPONSES, api_router
from careercoach.api.v1 import build_health_report
from careercoach.core.config import Settings, get_settings
from careercoach.core.database import DatabaseManager
from careercoach.core.exceptions import (
    CareerCoachError,
    GenerationFailedError,
    NotFoundError,
    PersistenceFailedError,
    ServiceError,
    UnauthorizedError,
    ValidationError,
)
from careercoach.core.logging import (
    clear_request_context,
    get_logger,
    log_shutdown_info,
    log_startup_info,
    performance_logger,
    set_request_context,
    setup_logging,
)
from careercoach.services import create_scheduler, run_insight_refresh
from careercoach.services.llm import GeminiService, ResilientStructuredGenerator

logger = get_logger(__name__)

# Most specific first
ERROR_STATUS_CODES = (
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (PersistenceFailedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (GenerationFailedError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ServiceError, status.HTTP_502_BAD_GATEWAY),
)


def status_code_for(exc: CareerCoachError) -> int:
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, status_code: int, error_type: str, message: Any, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "type": error_type,
                "message": message,
                "path": str(request.url.path),
                **extra,
            }
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup and shutdown events.

    Handles:
    - Database initialization and table creation
    - Gemini client and structured generator setup
    - Weekly insight refresh scheduling
    - Resource cleanup on shutdown
    """
    settings: Settings = app.state.settings
    log_startup_info(settings)

    db_manager = DatabaseManager(settings)
    await db_manager.initialize()
    await db_manager.create_all_tables()

    gemini = GeminiService(**settings.gemini_config)
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; generation requests will fail")
    structured = ResilientStructuredGenerator(
        gemini,
        max_retries=settings.llm_max_retries,
        retry_delay=settings.llm_retry_delay,
    )

    app.state.db_manager = db_manager
    app.state.structured_generator = structured
    app.state.scheduler = None

    if settings.scheduler_enabled:
        scheduler = create_scheduler(
            settings,
            functools.partial(run_insight_refresh, db_manager, structured, settings),
        )
        scheduler.start()
        app.state.scheduler = scheduler
        logger.info("Insight refresh scheduler started")

    logger.info("Application startup completed successfully")

    try:
        yield
    finally:
        log_shutdown_info(settings)
        if app.state.scheduler is not None:
            app.state.scheduler.shutdown(wait=False)
        await gemini.aclose()
        await db_manager.close()
        logger.info("Application shutdown completed successfully")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given settings (default: environment)."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # Rate limiting middleware
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit_default],
        enabled=settings.rate_limit_enabled,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # CORS middleware for frontend integration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_credentials,
        allow_methods=settings.cors_methods,
        allow_headers=settings.cors_headers,
    )

    # Trusted host middleware for production security
    if settings.is_production:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        set_request_context(request_id)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
            performance_logger.log_request_time(
                request.method,
                request.url.path,
                time.perf_counter() - start_time,
                response.status_code,
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_request_context()

    app.include_router(api_router, prefix="/api", responses=ERROR_RESPONSES)

    # Exception handlers
    @app.exception_handler(CareerCoachError)
    async def career_coach_exception_handler(request: Request, exc: CareerCoachError):
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
        else:
            logger.info(f"{type(exc).__name__} on {request.url.path}: {exc}")
        return error_response(request, status_code, type(exc).__name__, str(exc))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with detailed error responses."""
        return error_response(request, exc.status_code, "HTTPException", exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors with detailed field information."""
        return error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "ValidationError",
            "Request validation failed",
            details=jsonable_encoder(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with proper logging."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        message = str(exc) if settings.debug else "An internal server error occurred"
        return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "InternalServerError", message)

    # Root endpoint
    @app.get("/", tags=["root"])
    async def root() -> Dict[str, Any]:
        return {
            "message": "AI Career Coach API",
            "version": API_VERSION,
            "status": "operational",
            "api": {
                "base_url": "/api",
                "version": "/api/v1",
                "authentication": "JWT Bearer Token",
            },
        }

    # Health check endpoint
    @app.get("/health", tags=["health"])
    @limiter.limit("30/minute")
    async def health_check(request: Request) -> Dict[str, Any]:
        """
        Health check endpoint for monitoring and load balancers.
        """
        return await build_health_report(request)

    return app


app = create_app()


if __name__ == "__main__":
    # Development server
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "careercoach.main:app",
        host="0.0.0.0",
        port=8000,
        reload=_settings.debug,
        log_level=_settings.log_level.lower(),
        access_log=True,
    )
