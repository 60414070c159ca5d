"""
issue_portal.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) that checks the platform's auth API answers.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from issue_portal.api.deps import auth_client
from issue_portal.platform_clients.auth_http import PlatformAuthClient

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(auth: PlatformAuthClient = Depends(auth_client)) -> dict[str, str]:
    if not await auth.health():
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Platform unavailable")
    return {"status": "ready"}
