"""
issue_portal.api.app

FastAPI app factory for the Issue Portal service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Own the shared platform HTTP client for the app's lifetime.
- Map `PortalError` and framework HTTP errors to `{"error": ...}` responses.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from issue_portal import __version__
from issue_portal.api.middleware import CorsMiddleware
from issue_portal.api.routers.admin_management import router as admin_management_router
from issue_portal.api.routers.health import router as health_router
from issue_portal.errors import PortalError
from issue_portal.observability.logging import configure_logging, get_logger
from issue_portal.observability.middleware import RequestContextMiddleware
from issue_portal.settings import Settings

log = get_logger(__name__)


def create_app(
    *, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        async with httpx.AsyncClient(
            base_url=settings.platform_url,
            timeout=settings.platform_timeout_seconds,
            transport=transport,
        ) as http:
            app.state.platform_http = http
            yield
        log.info("shutdown")

    app = FastAPI(
        title="Issue Portal Admin Management",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Starlette runs the last-added middleware first.
    app.add_middleware(
        CorsMiddleware,
        allow_origin=settings.cors_allow_origin,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router, tags=["health"])
    app.include_router(admin_management_router)

    @app.exception_handler(PortalError)
    async def _portal_error(_: Request, exc: PortalError) -> JSONResponse:
        log.info("request_rejected", error_type=type(exc).__name__, status_code=exc.status_code)
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Routing errors (404/405) and probe failures share the `{"error"}` body.
        return JSONResponse(
            {"error": exc.detail}, status_code=exc.status_code, headers=exc.headers
        )

    return app


# --- Module Notes -----------------------------------------------------------
# Composition only; the admin-management logic lives in `services.admin_management`.
