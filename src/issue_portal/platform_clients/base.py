"""
issue_portal.platform_clients.base

Shared plumbing for platform clients.

Responsibilities:
- Model the two credential kinds (caller token vs. service role key).
- Translate non-2xx platform responses into `UpstreamError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from issue_portal.errors import UpstreamError
from issue_portal.settings import Settings

_MESSAGE_KEYS = ("msg", "message", "error_description", "error")


@dataclass(frozen=True, slots=True)
class PlatformCredential:
    """
    Header material for one platform call.
    Both fields are secrets and stay out of repr.
    """

    apikey: str = field(repr=False)
    bearer: str = field(repr=False)

    @classmethod
    def for_caller(cls, settings: Settings, access_token: str) -> PlatformCredential:
        # Caller-scoped calls run under the platform's row-level policies.
        return cls(apikey=settings.platform_anon_key, bearer=access_token)

    @classmethod
    def anonymous(cls, settings: Settings) -> PlatformCredential:
        # No signed-in user (the public intake form).
        key = settings.platform_anon_key
        return cls(apikey=key, bearer=key)

    @classmethod
    def service(cls, settings: Settings) -> PlatformCredential:
        key = settings.platform_service_role_key
        return cls(apikey=key, bearer=key)

    def headers(self) -> dict[str, str]:
        return {"apikey": self.apikey, "Authorization": f"Bearer {self.bearer}"}


def error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in _MESSAGE_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.text or f"Platform request failed with status {response.status_code}"


def raise_for_platform_error(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise UpstreamError(error_message(response), upstream_status=response.status_code)


# --- Module Notes -----------------------------------------------------------
# The service credential is only ever built by `PlatformAdminClient` and the bootstrap CLI;
# request handlers receive caller credentials.
