"""FastAPI application for the DocuHero gateway."""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from api.auth.jwt import TokenService
from api.auth.providers import get_provider
from api.error_handlers import register_error_handlers
from api.middleware import (
    MetricsMiddleware,
    RateLimitMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
    get_metrics,
    get_metrics_content_type,
)
from api.models.api_models import RootResponse
from api.routes import auth, health, protected
from gateway import __version__
from gateway.config import Settings
from gateway.db import create_db_engine, init_db
from gateway.logging import configure_structlog, get_logger
from gateway.resilience import ClientRateLimiter

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables if asked to, and release the pool on shutdown (SIGTERM)."""
    settings: Settings = app.state.settings
    if settings.create_tables:
        init_db(app.state.engine)

    logger.info(
        "gateway_started",
        port=settings.port,
        auth_provider=app.state.auth_provider.name,
    )
    yield

    app.state.engine.dispose()
    logger.info("gateway_stopped")


def create_app(
    settings: Optional[Settings] = None,
    token_service: Optional[TokenService] = None,
) -> FastAPI:
    """Build the application.

    Everything request handlers need (engine, token service, identity
    provider, rate limiter) is created here and kept on ``app.state``.

    Args:
        settings: Configuration (defaults to Settings.from_env())
        token_service: Override the token service (tests inject a clock)

    Returns:
        Configured FastAPI app

    Raises:
        RuntimeError: If JWT_SECRET is missing
        ValueError: If AUTH_PROVIDER is unknown
    """
    settings = settings or Settings.from_env()
    configure_structlog(json_format=settings.log_json, log_level=settings.log_level)

    app = FastAPI(
        title="DocuHero API",
        description="Authentication gateway: user sync, password login and JWT access control",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = create_db_engine(settings.database_url)
    app.state.token_service = token_service or TokenService(settings.jwt_secret)
    app.state.auth_provider = get_provider(settings.auth_provider)
    app.state.rate_limiter = ClientRateLimiter(
        requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    # Middleware is added in reverse order of execution
    # Order of execution: CORS -> RequestContext -> SecurityHeaders -> Metrics -> RateLimit -> Route
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestContextMiddleware)

    # CORS for the frontend (outermost - handles preflight requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(protected.router)

    @app.get("/", response_model=RootResponse)
    async def root(request: Request) -> RootResponse:
        """Service banner listing the enabled endpoints."""
        provider = request.app.state.auth_provider
        return RootResponse(
            message="DocuHero API",
            version=__version__,
            security=provider.description,
            endpoints={
                "health": "/health",
                "auth": ", ".join(provider.auth_endpoints),
                "api": "/api/* (authenticated)",
            },
        )

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Prometheus metrics endpoint for scraping."""
        return Response(
            content=get_metrics(),
            media_type=get_metrics_content_type(),
        )

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
