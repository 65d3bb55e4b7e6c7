"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sqlalchemy import text

from cwie.api.v1 import api_router
from cwie.config import Settings, settings as default_settings
from cwie.core.context import AppContext
from cwie.core.exceptions import GENERIC_INTERNAL_MESSAGE, InternalError, ServiceError
from cwie.core.logging import setup_logging
from cwie.db.session import create_engine, create_session_factory, init_db
from cwie.services.identity_service import IdentityVerifier

logger = structlog.get_logger(__name__)


def init_sentry(settings: Settings) -> None:
    """Initialize Sentry for error tracking (only if DSN is properly configured)."""
    if not (settings.SENTRY_DSN and settings.SENTRY_DSN.startswith("https://")):
        logger.info("sentry_disabled")
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=None,  # Capture all logs
                event_level="ERROR",  # Only send ERROR and above as events
            ),
        ],
        release=settings.APP_VERSION,
        attach_stacktrace=True,
        send_default_pii=False,
    )


def build_context(
    settings: Settings, identity_verifier: Optional[IdentityVerifier] = None
) -> AppContext:
    """Wire the process-wide dependencies once."""
    engine = create_engine(settings)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        identity_verifier=identity_verifier
        or IdentityVerifier(settings.LDAP_API_URL, settings.LDAP_CA_BUNDLE),
    )


def create_app(
    settings: Optional[Settings] = None,
    identity_verifier: Optional[IdentityVerifier] = None,
) -> FastAPI:
    """Application factory."""
    settings = settings or default_settings
    setup_logging(settings)
    init_sentry(settings)

    context = build_context(settings, identity_verifier)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        # Startup
        if settings.DEBUG or settings.ENVIRONMENT == "development":
            await init_db(context.engine)
        logger.info("application_started", environment=settings.ENVIRONMENT, auth_mode=settings.AUTH_MODE)
        yield
        # Shutdown
        await context.engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=settings.APP_DESCRIPTION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        swagger_ui_parameters={
            "persistAuthorization": True,  # Persist authorization after page refresh
        },
    )
    app.state.context = context

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint with database status."""
        try:
            async with context.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            database = "ok"
        except Exception as e:
            logger.warning("health_check_database_unreachable", error=str(e))
            database = "unavailable"

        return {
            "status": "healthy" if database == "ok" else "degraded",
            "environment": settings.ENVIRONMENT,
            "version": settings.APP_VERSION,
            "database": database,
        }

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Map service errors to their status code. Internal details never leave the server."""
        message = GENERIC_INTERNAL_MESSAGE if isinstance(exc, InternalError) else exc.message
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": message},
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": GENERIC_INTERNAL_MESSAGE,
                "message": str(exc) if settings.DEBUG else "An error occurred",
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cwie.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.RELOAD,
    )
