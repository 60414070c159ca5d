"""
issue_portal.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and the shared platform HTTP client.
- Build per-request platform clients from those.
"""

from __future__ import annotations

import httpx
from fastapi import Depends, Request

from issue_portal.platform_clients.auth_http import PlatformAdminClient, PlatformAuthClient
from issue_portal.platform_clients.base import PlatformCredential
from issue_portal.platform_clients.rest_http import PlatformRestClient
from issue_portal.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Settings are fixed at app creation (see `create_app`).
    return request.app.state.settings  # type: ignore[attr-defined]


def platform_http(request: Request) -> httpx.AsyncClient:
    # Created once in the app lifespan and shared by all requests.
    return request.app.state.platform_http  # type: ignore[attr-defined]


def auth_client(
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(platform_http),
) -> PlatformAuthClient:
    return PlatformAuthClient(settings=settings, http=http)


def admin_client(
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(platform_http),
) -> PlatformAdminClient:
    return PlatformAdminClient(settings=settings, http=http)


def service_rest_client(
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(platform_http),
) -> PlatformRestClient:
    return PlatformRestClient(http=http, credential=PlatformCredential.service(settings))


# --- Module Notes -----------------------------------------------------------
# Platform clients are cheap wrappers around the shared `httpx.AsyncClient`; build them per request.
