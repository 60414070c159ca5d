"""
issue_portal.platform_clients.auth_http

Clients for the platform's auth API.

Responsibilities:
- Resolve a caller's bearer token into a `PlatformUser` (session verification).
- Perform account administration with the service credential.
"""

from __future__ import annotations

from urllib.parse import quote

import httpx

from issue_portal.observability.logging import get_logger
from issue_portal.platform_clients.base import PlatformCredential, raise_for_platform_error
from issue_portal.platform_clients.models import PlatformUser
from issue_portal.settings import Settings

log = get_logger(__name__)


def _user_path(user_id: str) -> str:
    # One path segment, whatever the id contains.
    if user_id in ("", ".", ".."):
        raise ValueError(f"invalid user id: {user_id!r}")
    return f"/auth/v1/admin/users/{quote(user_id, safe='')}"


class PlatformAuthClient:
    """
    Caller-facing auth calls. Uses the public anon key plus whatever token is being verified.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    async def get_user(self, access_token: str) -> PlatformUser | None:
        cred = PlatformCredential.for_caller(self._settings, access_token)
        r = await self._http.get("/auth/v1/user", headers=cred.headers())
        if not r.is_success:
            # Expired, revoked or malformed tokens all mean "no identity".
            log.info("session_rejected", upstream_status=r.status_code)
            return None
        return PlatformUser.model_validate(r.json())

    async def health(self) -> bool:
        r = await self._http.get(
            "/auth/v1/health", headers={"apikey": self._settings.platform_anon_key}
        )
        return r.is_success


class PlatformAdminClient:
    """
    Elevated account administration. Every call carries the service role key.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._http = http
        self._cred = PlatformCredential.service(settings)

    async def create_user(
        self, *, email: str, password: str, email_confirm: bool = True
    ) -> PlatformUser:
        r = await self._http.post(
            "/auth/v1/admin/users",
            headers=self._cred.headers(),
            json={"email": email, "password": password, "email_confirm": email_confirm},
        )
        raise_for_platform_error(r)
        return PlatformUser.model_validate(r.json())

    async def update_user_password(self, *, user_id: str, password: str) -> None:
        r = await self._http.put(
            _user_path(user_id),
            headers=self._cred.headers(),
            json={"password": password},
        )
        raise_for_platform_error(r)

    async def delete_user(self, *, user_id: str) -> None:
        r = await self._http.delete(_user_path(user_id), headers=self._cred.headers())
        raise_for_platform_error(r)

    async def get_user(self, *, user_id: str) -> PlatformUser | None:
        r = await self._http.get(_user_path(user_id), headers=self._cred.headers())
        if r.status_code == 404:
            return None
        raise_for_platform_error(r)
        return PlatformUser.model_validate(r.json())


# --- Module Notes -----------------------------------------------------------
# `PlatformAdminClient` must only be constructed server-side; the browser and
# the console clients never see the service role key.
