"""
FastAPI server for the storefront.

Serves catalog, cart and checkout endpoints to the web client.
"""
from __future__ import annotations

import logging
import urllib.parse
from collections.abc import Callable
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from sqlalchemy import text

from storefront import __version__
from storefront.api.webapp import router as webapp_router
from storefront.api.webapp import set_services
from storefront.core.bootstrap import Application, build_application
from storefront.core.config import Settings, load_settings
from storefront.core.exceptions import (
    DatabaseException,
    ProductNotFoundException,
    StorefrontException,
)
from storefront.core.logging_config import setup_logging
from storefront.core.sentry_integration import capture_exception, init_sentry
from storefront.services import OrderSubmission

logger = logging.getLogger(__name__)

DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:8080",
]


def _origin_from_url(value: str | None) -> str | None:
    if not value:
        return None
    try:
        parsed = urllib.parse.urlsplit(value.strip())
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return f"{parsed.scheme}://{parsed.netloc}"


def allowed_origins(settings: Settings) -> list[str]:
    origins: list[str] = []
    for raw in settings.api.cors_origins:
        origin = _origin_from_url(raw)
        if origin and origin not in origins:
            origins.append(origin)
    # Only allow localhost in development
    if settings.is_dev:
        origins.extend(origin for origin in DEV_ORIGINS if origin not in origins)
    return origins


def create_api_app(
    settings: Settings | None = None,
    application: Application | None = None,
    on_complete: Callable[[OrderSubmission], None] | None = None,
) -> FastAPI:
    """
    Create FastAPI application for the storefront.

    Args:
        settings: Loaded settings (read from the environment when omitted)
        application: Pre-built services, mainly for tests
        on_complete: Order-submission hook called after a successful checkout
    """
    settings = settings or load_settings()
    application = application or build_application(settings, on_complete=on_complete)

    # Wire services immediately so routes work even without lifespan events
    set_services(application.catalog, application.cart_service, application.checkout_service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Storefront API starting...")
        set_services(application.catalog, application.cart_service, application.checkout_service)
        yield
        logger.info("Storefront API shutting down...")
        application.engine.dispose()

    app = FastAPI(
        title="Storefront API",
        description="Catalog, cart and checkout API for the storefront",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    app.state.application = application

    # Rate limiter configuration
    app.state.limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    @app.exception_handler(ProductNotFoundException)
    async def product_not_found_handler(request: Request, exc: ProductNotFoundException):
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(DatabaseException)
    async def database_error_handler(request: Request, exc: DatabaseException):
        logger.error(f"Database error on {request.url.path}: {exc.message}")
        capture_exception(exc, request={"path": request.url.path})
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

    @app.exception_handler(StorefrontException)
    async def storefront_error_handler(request: Request, exc: StorefrontException):
        return JSONResponse(status_code=400, content={"detail": exc.message})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Session-Id"],
        expose_headers=["Content-Length", "Content-Type"],
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' data: https:; "
            "style-src 'self' 'unsafe-inline'; "
            "frame-ancestors 'none'"
        )
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Checkout and cart responses are per session
        if request.url.path.startswith(("/api/v1/cart", "/api/v1/checkout")):
            response.headers["Cache-Control"] = "no-store"
        return response

    app.include_router(webapp_router)

    @app.get("/")
    async def root():
        return {"service": "Storefront API", "version": __version__, "docs": "/api/docs"}

    @app.get("/health")
    async def health():
        database = "ok"
        try:
            with application.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning(f"Health check database error: {e}")
            database = "error"
        return {
            "status": "ok" if database == "ok" else "degraded",
            "database": database,
            "cart_storage": "redis" if application.cart_storage.uses_redis else "memory",
        }

    return app


def main() -> None:
    """Run the API with uvicorn."""
    settings = load_settings()
    setup_logging(settings.log_level)
    init_sentry(environment=settings.environment)

    app = create_api_app(settings)
    logger.info(f"Starting Storefront API on http://{settings.api.host}:{settings.api.port}")
    uvicorn.run(app, host=settings.api.host, port=settings.api.port, log_level="info")


if __name__ == "__main__":
    main()
