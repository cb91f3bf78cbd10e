"""
JWT Pizza - authentication service

Main FastAPI application with security hardening.
"""

import secrets
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from jwtpizza.api.v1.api import api_router
from jwtpizza.auth.credentials import CredentialStore
from jwtpizza.auth.jwt import TokenCodec
from jwtpizza.auth.middleware import AuthResolverMiddleware
from jwtpizza.auth.password import generate_temp_password
from jwtpizza.auth.resolver import AuthResolver
from jwtpizza.auth.service import ChaosMonkey
from jwtpizza.core.config import Settings
from jwtpizza.core.database import Database
from jwtpizza.core.errors import ServiceError
from jwtpizza.core.logging import configure_logging, get_logger, set_request_id
from jwtpizza.models.user import Role
from jwtpizza.observability.metrics import AuthMetrics

logger = get_logger(__name__)


# =============================================================================
# Application Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    settings: Settings = app.state.settings
    database: Database = app.state.database

    logger.info("starting", version=settings.version)
    if settings.jwt_secret_generated:
        logger.warning("jwt_secret_generated", hint="set JWT_SECRET_KEY in production")

    settings.ensure_db_dir()
    await database.init()
    logger.info("database_initialized")

    await create_default_admin_if_needed(database, settings)

    yield

    logger.info("shutting_down")
    await database.close()


async def create_default_admin_if_needed(database: Database, settings: Settings) -> None:
    """Create the bootstrap admin user if no users exist."""
    async with database.session() as session:
        store = CredentialStore(session)
        if await store.count() > 0:
            return

        password = settings.default_admin_password
        generated = password is None
        if generated:
            password = generate_temp_password()

        admin = await store.create(
            settings.default_admin_name,
            settings.default_admin_email,
            password,
            [Role.ADMIN],
        )
        logger.warning(
            "default_admin_created",
            user_id=admin.id,
            admin_email=admin.email,
            # Printed once so the operator can log in; redacted otherwise
            temporary_credential=password if generated else None,
        )


# =============================================================================
# Middleware
# =============================================================================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: Callable):
        response = await call_next(request)

        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"

        return response


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add unique request ID for tracing and bind it to the log context."""

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = set_request_id(
            request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        )
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response


# =============================================================================
# Error Handlers
# =============================================================================

async def service_error_handler(request: Request, exc: ServiceError):
    """Render service errors as {"message": ...} with their status."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unknown routes answer exactly like hidden admin endpoints."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "unknown endpoint"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to prevent information leakage."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.exception("unhandled_exception", error=str(exc))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": "An internal error occurred",
            "request_id": request_id,
        },
    )


# =============================================================================
# FastAPI Application
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own database, codec and resolver."""
    settings = settings or Settings.from_env()
    configure_logging(
        log_level=settings.log_level,
        json_output=settings.log_json,
        development_mode=settings.log_dev_mode,
    )

    app = FastAPI(
        title="JWT Pizza Auth API",
        version=settings.version,
        description="Authentication, session revocation and role checks for JWT Pizza",
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url="/redoc" if settings.enable_docs else None,
    )

    database = Database(settings.database_url, echo=settings.sql_debug)
    codec = TokenCodec(settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    app.state.settings = settings
    app.state.database = database
    app.state.token_codec = codec
    app.state.auth_resolver = AuthResolver(codec, database.session_maker)
    app.state.metrics = AuthMetrics(source=settings.metrics_source)
    app.state.chaos = ChaosMonkey()

    # Order matters - last added runs first. The auth resolver runs after
    # the request id is bound so its log lines carry it.
    app.add_middleware(AuthResolverMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    if "*" not in settings.trusted_hosts:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    @app.get("/", tags=["root"])
    def home():
        """Root endpoint."""
        return {
            "message": "welcome to JWT Pizza",
            "version": settings.version,
        }

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        db_status = "healthy"
        try:
            async with database.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            db_status = f"unhealthy: {str(e)}"

        return {
            "status": "healthy" if db_status == "healthy" else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.version,
            "database": db_status,
        }

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "jwtpizza.main:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
        log_level="info",
    )
