"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from sarweb import __version__
from sarweb.adapters.base.adapter import SearchAdapter
from sarweb.adapters.elasticsearch.adapter import ElasticsearchAdapter
from sarweb.api.errors import register_exception_handlers
from sarweb.api.middleware import (
    AccessLogMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
    UnhandledErrorMiddleware,
)
from sarweb.api.ratelimit import FixedWindowRateLimiter
from sarweb.api.router import router as api_router
from sarweb.config.settings import Settings
from sarweb.core.reports import ReportService
from sarweb.observability.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    adapter: SearchAdapter | None = None,
    rate_limiter: FixedWindowRateLimiter | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.
        adapter: Report store adapter. If None, an ``ElasticsearchAdapter`` is
            built from ``settings.elasticsearch``.
        rate_limiter: Limiter for ``/api/`` routes. If None, one is built from
            ``settings.rate_limit``.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        yaml_path = Path("sarweb-config.yaml")
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    if adapter is None:
        es = settings.elasticsearch
        adapter = ElasticsearchAdapter(
            url=es.url,
            index=es.index,
            username=es.username,
            password=es.password,
            verify_certs=es.verify_certs,
            request_timeout=es.request_timeout,
        )

    if rate_limiter is None:
        rate_limiter = FixedWindowRateLimiter(
            max_requests=settings.rate_limit.max_requests,
            window_seconds=settings.rate_limit.window_seconds,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        setup_logging(settings.observability)
        await adapter.initialize()

        logger.info("%s v%s running on port %d", settings.app_name, __version__, settings.server.port)
        logger.info("Access the application at: http://localhost:%d", settings.server.port)
        logger.info("Environment: %s", settings.environment)
        yield

        logger.info("Shutting down %s...", settings.app_name)
        await adapter.shutdown()

    app = FastAPI(
        title=settings.app_name,
        description="Paginated, searchable read access to SAR reports stored in Elasticsearch.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.adapter = adapter
    app.state.rate_limiter = rate_limiter
    app.state.report_service = ReportService(adapter)

    # Added innermost first: requests pass security headers, gzip, access log,
    # CORS, the rate limiter and the 500 renderer before reaching a route.
    app.add_middleware(UnhandledErrorMiddleware)
    if settings.rate_limit.enabled:
        app.add_middleware(
            RateLimitMiddleware,
            limiter=rate_limiter,
            path_prefix=settings.rate_limit.path_prefix,
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    static_dir = Path(settings.server.static_dir)
    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.include_router(api_router, prefix="/api")

    templates = Jinja2Templates(directory=str(settings.server.templates_dir))

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index(request: Request) -> HTMLResponse:
        """Render the SAR report browser page."""
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "app_name": settings.app_name,
                "version": __version__,
                "page_size": settings.pagination.default_page_size,
            },
        )

    return app
