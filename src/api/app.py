"""
Main FastAPI application factory.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .dependencies import get_firestore_client, get_logger, reset_services
from .routes import auth, bookings, countries, health, properties, register, registrations
from .models import ErrorResponse
from .security.firebase_auth import verify_admin_token
from ..utils.errors import RegistrationError


def error_response(exc: RegistrationError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            success=False,
            message=exc.message,
            error_code=exc.error_code,
            details={**exc.details, "retryable": exc.retryable} if exc.retryable else exc.details or None
        ).model_dump(mode="json")
    )


def is_public_request(path: str, method: str) -> bool:
    """Requests that skip the admin token check."""
    prefix = settings.versioned_prefix
    if method == "OPTIONS" or path == "/":
        return True
    if path.startswith((f"{settings.api_prefix}/docs", f"{settings.api_prefix}/redoc",
                        f"{settings.api_prefix}/openapi.json")):
        return True
    if path.startswith((f"{prefix}/health", f"{prefix}/register")):
        return True
    # The guest form needs the country list
    return method == "GET" and path.rstrip("/") == f"{prefix}/countries"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger = get_logger()
    logger.info("Starting FastAPI application", environment=settings.environment,
                api_version=settings.api_version)

    if not get_firestore_client().initialize():
        logger.warning("Firestore not initialized at startup; requests will retry")

    yield

    logger.info("Shutting down FastAPI application")
    reset_services()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(RegistrationError)
    async def registration_error_handler(request: Request, exc: RegistrationError):
        log = get_logger()
        if exc.status_code >= 500:
            log.error("request_failed", path=request.url.path, error_code=exc.error_code, error=exc.message)
        else:
            log.info("request_rejected", path=request.url.path, error_code=exc.error_code, error=exc.message)
        return error_response(exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled errors."""
        get_logger().error("Unhandled exception", path=request.url.path, error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                success=False,
                message="Internal server error",
                error_code="INTERNAL_ERROR",
                details={"error": str(exc)}
            ).model_dump(mode="json")
        )

    @app.middleware("http")
    async def auth_middleware(request: Request, call_next):
        if is_public_request(request.url.path, request.method):
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")
        id_token = auth_header.split(" ", 1)[1].strip() if auth_header.startswith("Bearer ") else ""
        try:
            claims = verify_admin_token(id_token)
        except RegistrationError as e:
            return error_response(e)
        request.state.user_email = claims.get("email")
        request.state.user_uid = claims.get("uid")
        return await call_next(request)

    for module in (bookings, registrations, register, properties, countries, health, auth):
        app.include_router(module.router, prefix=settings.versioned_prefix)

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "message": "Guest Registration API is running",
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs"
        }

    return app
