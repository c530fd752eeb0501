"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (audit, security headers, CORS)
4. Exception handlers (custom exceptions)
5. Startup/shutdown of the service container

Run with: uvicorn acns.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from acns import __version__
from acns.api.container import ServiceContainer, build_container
from acns.api.routes import ai_router, health_router
from acns.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from acns.core.config import Settings, get_settings
from acns.core.exceptions import ACNSException, RateLimitExceeded
from acns.core.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: build the container (unless one was injected), create
      tables when configured, start the session sweep
    - Shutdown: stop the sweep, close Gemini clients and database connections
    """
    settings: Settings = app.state.settings
    if app.state.container is None:
        app.state.container = build_container(settings)
    container: ServiceContainer = app.state.container

    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"Gemini model: {settings.gemini_model}, keys: {len(container.key_pool)}")
    logger.info(f"AI rate limit: {settings.ai_rate_limit_per_minute} req/min")

    await container.startup()

    yield  # Application runs here

    logger.info(f"Shutting down {settings.app_name}")
    await container.shutdown()


def _register_exception_handlers(app: FastAPI, settings: Settings) -> None:

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers={"Retry-After": str(exc.retry_after)}
        )

    @app.exception_handler(ACNSException)
    async def acns_exception_handler(request: Request, exc: ACNSException):
        """Handle all custom application exceptions."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handle uncaught exceptions globally.

        Detailed error information is only included in development mode.
        """
        logger.exception(f"Unhandled exception: {exc}")

        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.is_development() else None,
                "timestamp": datetime.utcnow().isoformat()
            }
        )


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; read from the environment when omitted
        container: Prebuilt service container (tests inject one)
    """
    if settings is None:
        settings = container.settings if container else get_settings()
    setup_logging(settings.log_level, settings.log_dir)

    app = FastAPI(
        title="ACNS AI API",
        description="""
        Gemini-powered assistant for the ACNS website.

        ## Features

        - **Chatbot**: multi-turn conversations grounded in live site content
        - **Smart Search**: search services, posts, products and jobs with an AI summary
        - **Quick Actions**: contextual suggestions for the chat widget
        - **Summaries**: bullet-point summaries of posts, services and products
        - **Content Drafts** (admin): blog posts, product/service copy, SEO, email, social
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.container = container

    # ============================================================
    # Middleware Configuration (Order matters!)
    # ============================================================

    app.add_middleware(SecurityHeadersMiddleware)

    if settings.enable_audit_logging:
        app.add_middleware(AuditMiddleware)
        logger.info("Audit logging middleware enabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app, settings)

    app.include_router(health_router)
    app.include_router(ai_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": "ACNS AI API",
            "version": __version__,
            "documentation": "/docs",
            "health": "/health"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "acns.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().is_development()
    )
