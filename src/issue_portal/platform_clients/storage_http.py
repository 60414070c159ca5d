"""
issue_portal.platform_clients.storage_http

Client for the platform's object storage API.
"""

from __future__ import annotations

import httpx

from issue_portal.platform_clients.base import PlatformCredential, raise_for_platform_error
from issue_portal.settings import Settings


class PlatformStorageClient:
    def __init__(
        self, *, settings: Settings, http: httpx.AsyncClient, credential: PlatformCredential
    ) -> None:
        self._settings = settings
        self._http = http
        self._cred = credential

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        *,
        content_type: str = "application/octet-stream",
        upsert: bool = False,
    ) -> None:
        r = await self._http.post(
            f"/storage/v1/object/{bucket}/{path}",
            content=content,
            headers={
                **self._cred.headers(),
                "Content-Type": content_type,
                "x-upsert": "true" if upsert else "false",
            },
        )
        raise_for_platform_error(r)

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._settings.platform_url.rstrip('/')}/storage/v1/object/public/{bucket}/{path}"


# --- Module Notes -----------------------------------------------------------
# Public URLs are built locally; the buckets used here are configured as public.
